"""
Training Configuration

Dataclass configs for the classifier network and the gradient-descent loop.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class NetworkConfig:
    """Configuration for the fully-connected sigmoid classifier."""
    # Shape
    n_inputs: int = 28 * 28
    hidden_sizes: Tuple[int, ...] = (30,)
    n_classes: int = 10

    # Initialization (normal, mean 0)
    bias_stddev: float = 1.0
    weight_stddev: Optional[float] = None  # None: sqrt(1 / layer_size) per layer

    def __post_init__(self):
        self.hidden_sizes = tuple(int(h) for h in self.hidden_sizes)
        if self.n_inputs < 1:
            raise ValueError(f"n_inputs must be >= 1, but got {self.n_inputs}")
        if self.n_classes < 2:
            raise ValueError(f"n_classes must be >= 2, but got {self.n_classes}")
        if any(h < 1 for h in self.hidden_sizes):
            raise ValueError(f"hidden layer sizes must be >= 1, but got {self.hidden_sizes}")
        if self.bias_stddev < 0 or (self.weight_stddev is not None and self.weight_stddev < 0):
            raise ValueError("initialization stddevs must be non-negative")

    @property
    def layer_sizes(self) -> Tuple[int, ...]:
        """Hidden layers followed by the output layer."""
        return self.hidden_sizes + (self.n_classes,)


@dataclass
class TrainingConfig:
    """Configuration for the per-sample gradient-descent loop."""
    # Optimization
    learning_rate: float = 0.1
    epochs: int = 100
    train_size: Optional[int] = 5000  # None: use every training sample
    shuffle: bool = False

    # Reproducibility
    seed: int = 0

    # Logging
    verbose: bool = True
    log_every: int = 1  # print every n-th epoch

    def __post_init__(self):
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, but got {self.learning_rate}")
        if self.epochs < 0:
            raise ValueError(f"epochs must be non-negative, but got {self.epochs}")
        if self.train_size is not None and self.train_size < 0:
            raise ValueError(f"train_size must be non-negative, but got {self.train_size}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, but got {self.log_every}")
