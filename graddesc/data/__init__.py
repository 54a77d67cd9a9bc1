"""
Datasets feeding the classifier.

- Sample / DatasetFormatError: record type and reader error
- load_idx_dataset: big-endian IDX images + labels files (the digit dataset)
- make_linearly_separable: two-class toy data with a margin
"""

from .types import Sample, DatasetFormatError
from .idx import read_idx_images, read_idx_labels, load_idx_dataset, MAGIC_IMAGES, MAGIC_LABELS
from .toy import make_linearly_separable

__all__ = ['Sample', 'DatasetFormatError',
           'read_idx_images', 'read_idx_labels', 'load_idx_dataset',
           'MAGIC_IMAGES', 'MAGIC_LABELS',
           'make_linearly_separable']
