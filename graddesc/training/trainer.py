"""
Gradient-Descent Trainer

Per-sample training of a ClassifierNetwork:

    for each epoch:
        for each sample:
            set inputs -> evaluate_all -> backpropagate_from(cost) -> update_parameters(lr)

Average squared error and training accuracy are recorded per epoch. The
error and the predicted label of a sample are read from the forward pass that
precedes its update.
"""

import time
import numpy as np
from typing import Dict, List, Optional, Sequence

from ..data import Sample
from .config import TrainingConfig
from .network import ClassifierNetwork


class Trainer:
    """
    Train a classifier graph with plain gradient descent.

    Usage:
        >>> rng = np.random.default_rng(0)
        >>> net = build_classifier(NetworkConfig(n_inputs=2, hidden_sizes=(4,), n_classes=2), rng)
        >>> trainer = Trainer(net, TrainingConfig(learning_rate=0.5, epochs=100))
        >>> result = trainer.fit(make_linearly_separable(64, rng))
        >>> result['accuracy_history'][-1]
    """

    def __init__(self, network: ClassifierNetwork, config: Optional[TrainingConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Args:
            network: Built (sorted) classifier
            config: Training configuration (uses defaults if None)
            rng: Generator for shuffling; seeded from config.seed if None
        """
        self.network = network
        self.config = config or TrainingConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        # History
        self.epoch = 0
        self.loss_history: List[float] = []
        self.accuracy_history: List[float] = []

    def train_epoch(self, samples: Sequence[Sample]) -> Dict:
        """One pass over ``samples``. Returns {'avg_error', 'correct', 'accuracy'}."""
        net = self.network
        lr = self.config.learning_rate
        n = len(samples)

        order = self.rng.permutation(n) if self.config.shuffle else range(n)
        avg_error = 0.0
        correct = 0
        for i in order:
            sample = samples[i]
            net.set_sample(sample.features, sample.label)
            avg_error += net.train_step(lr) / n
            if net.predicted_label() == sample.label:
                correct += 1

        accuracy = correct / n if n else 0.0
        self.epoch += 1
        self.loss_history.append(avg_error)
        self.accuracy_history.append(accuracy)
        return {'avg_error': avg_error, 'correct': correct, 'accuracy': accuracy}

    def fit(self, samples: Sequence[Sample]) -> Dict:
        """
        Run ``config.epochs`` epochs over the first ``config.train_size`` samples.

        Returns:
            {
                'loss_history': List[float],
                'accuracy_history': List[float],
                'final_accuracy': float,
                'n_train': int,
                'time_ms': float,
            }
        """
        start_time = time.time()
        cfg = self.config
        train = list(samples if cfg.train_size is None else samples[:cfg.train_size])

        for _ in range(cfg.epochs):
            stats = self.train_epoch(train)
            if cfg.verbose and (self.epoch % cfg.log_every == 0 or self.epoch == cfg.epochs):
                print(f"Epoch: {self.epoch - 1} {stats['avg_error']:.6f} "
                      f"{stats['correct']}/{len(train)} {stats['accuracy']:.6f}")

        return {
            'loss_history': list(self.loss_history),
            'accuracy_history': list(self.accuracy_history),
            'final_accuracy': self.accuracy_history[-1] if self.accuracy_history else 0.0,
            'n_train': len(train),
            'time_ms': (time.time() - start_time) * 1000,
        }

    def evaluate(self, samples: Sequence[Sample]) -> Dict:
        """
        Forward passes only; parameters are not touched.

        Returns:
            {'correct': int, 'total': int, 'accuracy': float, 'avg_error': float}
        """
        net = self.network
        n = len(samples)
        correct = 0
        avg_error = 0.0
        for sample in samples:
            net.set_sample(sample.features, sample.label)
            net.graph.evaluate_all()
            avg_error += net.cost.value / n
            if net.predicted_label() == sample.label:
                correct += 1

        accuracy = correct / n if n else 0.0
        if self.config.verbose:
            print(f"Test Result {correct}/{n} {accuracy:.6f}")
        return {'correct': correct, 'total': n, 'accuracy': accuracy, 'avg_error': avg_error}
