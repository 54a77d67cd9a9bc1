"""
Classifier training on top of the graph engine.

- NetworkConfig / TrainingConfig: dataclass configuration
- build_classifier / ClassifierNetwork: layered sigmoid network with injected RNG
- Trainer: per-sample gradient-descent loop with accuracy reporting
- history_frame / plot_history: per-epoch table and curves
"""

from .config import NetworkConfig, TrainingConfig
from .network import ClassifierNetwork, build_classifier, init_parameter
from .trainer import Trainer
from .report import history_frame, plot_history

__all__ = ['NetworkConfig', 'TrainingConfig',
           'ClassifierNetwork', 'build_classifier', 'init_parameter',
           'Trainer',
           'history_frame', 'plot_history']
