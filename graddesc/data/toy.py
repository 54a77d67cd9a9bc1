# graddesc/data/toy.py
"""
Linearly separable two-class toy data.

Points are drawn uniformly from [-1, 1]^n_features and labelled by the side
of the hyperplane sum(x) = 0 they fall on. Points closer to the plane than
``margin`` are rejected, so the two classes are separated by a gap.
"""
from __future__ import annotations
from typing import List

import numpy as np

from .types import Sample


def make_linearly_separable(n_samples: int, rng: np.random.Generator,
                            n_features: int = 2, margin: float = 0.2) -> List[Sample]:
    """
    Draw ``n_samples`` labelled points using the caller's generator.

    Labels are 1 where sum(x) > 0 and 0 otherwise.
    """
    if n_samples < 0:
        raise ValueError(f"n_samples must be non-negative, but got {n_samples}")
    if n_features < 1:
        raise ValueError(f"n_features must be >= 1, but got {n_features}")
    if not 0.0 <= margin < 1.0:
        raise ValueError(f"margin must lie in [0, 1), but got {margin}")

    # distance of x to the plane sum(x) = 0
    scale = 1.0 / np.sqrt(n_features)
    samples: List[Sample] = []
    while len(samples) < n_samples:
        x = rng.uniform(-1.0, 1.0, size=n_features)
        dist = float(np.sum(x)) * scale
        if abs(dist) < margin:
            continue
        samples.append(Sample(features=x, label=int(dist > 0)))
    return samples
