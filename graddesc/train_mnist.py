"""
Train the sigmoid classifier on IDX digit files or on generated toy data.

Examples:
    graddesc-train --train-images mnist/train-images-idx3-ubyte \
                   --train-labels mnist/train-labels-idx1-ubyte \
                   --test-images mnist/t10k-images-idx3-ubyte \
                   --test-labels mnist/t10k-labels-idx1-ubyte
    graddesc-train --toy --epochs 50 --learning-rate 0.5 --hidden 4
"""

import argparse
import sys
import numpy as np

from graddesc.core import print_graph_summary
from graddesc.data import load_idx_dataset, make_linearly_separable
from graddesc.training import (
    NetworkConfig, TrainingConfig, Trainer, build_classifier, history_frame, plot_history,
)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Gradient-descent digit classifier on a scalar autodiff graph',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--train-images', type=str, default='mnist/train-images-idx3-ubyte',
                        help='IDX training images file')
    parser.add_argument('--train-labels', type=str, default='mnist/train-labels-idx1-ubyte',
                        help='IDX training labels file')
    parser.add_argument('--test-images', type=str, default='mnist/t10k-images-idx3-ubyte',
                        help='IDX test images file')
    parser.add_argument('--test-labels', type=str, default='mnist/t10k-labels-idx1-ubyte',
                        help='IDX test labels file')
    parser.add_argument('--toy', action='store_true',
                        help='Train on a generated linearly separable 2-class dataset instead')
    parser.add_argument('--toy-samples', type=int, default=200,
                        help='Number of toy samples (80%% train, 20%% test)')
    parser.add_argument('--epochs', type=int, default=100,
                        help='Number of passes over the training set')
    parser.add_argument('--learning-rate', type=float, default=0.1,
                        help='Gradient-descent step size')
    parser.add_argument('--train-size', type=int, default=5000,
                        help='Use only the first N training samples (0 for all)')
    parser.add_argument('--hidden', type=str, default='30',
                        help='Comma-separated hidden layer sizes (e.g. "30" or "64,32")')
    parser.add_argument('--seed', type=int, default=0,
                        help='Seed for parameter initialization and toy data')
    parser.add_argument('--shuffle', action='store_true',
                        help='Shuffle the training set every epoch')
    parser.add_argument('--summary', action='store_true',
                        help='Print a summary of the built graph')
    parser.add_argument('--history-csv', type=str, default=None,
                        help='Write per-epoch error and accuracy to this CSV file')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save training curves to this image file')
    parser.add_argument('--quiet', action='store_true',
                        help='Suppress per-epoch output')
    return parser.parse_args(argv)


def parse_hidden(hidden_str):
    """Parse '64,32' into (64, 32); an empty string means no hidden layer."""
    return tuple(int(h) for h in hidden_str.split(',') if h.strip())


def main(argv=None):
    args = parse_args(argv)
    rng = np.random.default_rng(args.seed)

    if args.toy:
        samples = make_linearly_separable(args.toy_samples, rng)
        n_train = int(0.8 * len(samples))
        train_set, test_set = samples[:n_train], samples[n_train:]
        net_config = NetworkConfig(n_inputs=2, hidden_sizes=parse_hidden(args.hidden), n_classes=2)
    else:
        try:
            train_set = load_idx_dataset(args.train_images, args.train_labels)
            test_set = load_idx_dataset(args.test_images, args.test_labels)
        except (OSError, ValueError) as e:
            print(f"Could not load dataset: {e}", file=sys.stderr)
            return 1
        net_config = NetworkConfig(hidden_sizes=parse_hidden(args.hidden))

    train_config = TrainingConfig(
        learning_rate=args.learning_rate,
        epochs=args.epochs,
        train_size=args.train_size or None,
        shuffle=args.shuffle,
        seed=args.seed,
        verbose=not args.quiet,
    )

    network = build_classifier(net_config, rng)
    if args.summary:
        print_graph_summary(network.graph)

    trainer = Trainer(network, train_config, rng=rng)
    fit_result = trainer.fit(train_set)
    result = trainer.evaluate(test_set)
    if args.quiet:
        print(f"Test Result {result['correct']}/{result['total']} {result['accuracy']:.6f}")

    if args.history_csv:
        history_frame(fit_result).to_csv(args.history_csv, index=False)
    if args.plot:
        plot_history(fit_result, save_path=args.plot, test_accuracy=result['accuracy'])
    return 0


if __name__ == "__main__":
    sys.exit(main())
