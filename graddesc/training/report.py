"""
Training history reports: a per-epoch table and loss/accuracy curves.
"""

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
from typing import Dict, Optional


def history_frame(result: Dict) -> pd.DataFrame:
    """
    Per-epoch table from the dictionary returned by Trainer.fit.

    Columns: epoch, avg_error, accuracy
    """
    losses = result['loss_history']
    return pd.DataFrame({
        'epoch': np.arange(len(losses)),
        'avg_error': np.asarray(losses, dtype=float),
        'accuracy': np.asarray(result['accuracy_history'], dtype=float),
    })


def plot_history(result: Dict, save_path: Optional[str] = None,
                 test_accuracy: Optional[float] = None) -> None:
    """Plot average squared error and training accuracy per epoch."""
    df = history_frame(result)

    fig, axes = plt.subplots(1, 2, figsize=(12, 4))

    ax = axes[0]
    ax.plot(df['epoch'], df['avg_error'], 'b-', linewidth=2)
    ax.set_xlabel('Epoch')
    ax.set_ylabel('Average squared error')
    ax.set_title('Training Error')
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.plot(df['epoch'], df['accuracy'], 'g-', linewidth=2, label='Train')
    if test_accuracy is not None:
        ax.axhline(test_accuracy, color='red', linestyle='--', label=f'Test ({test_accuracy:.3f})')
    ax.set_xlabel('Epoch')
    ax.set_ylabel('Accuracy')
    ax.set_title('Classification Accuracy')
    ax.set_ylim(0.0, 1.0)
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"\nFigure saved to: {save_path}")

    plt.close()
