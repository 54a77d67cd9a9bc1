# graddesc/data/types.py
from dataclasses import dataclass

import numpy as np


@dataclass
class Sample:
    """One labelled example: flat float64 features and an integer class."""
    features: np.ndarray
    label: int


class DatasetFormatError(ValueError):
    """Raised when a dataset file does not match its expected binary layout."""
