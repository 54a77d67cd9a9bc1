"""
IDX dataset reader

Layout of the two files (all header fields big-endian uint32):

    images: magic=0x00000803, count, rows, cols, then count*rows*cols bytes
    labels: magic=0x00000801, count, then count bytes

Pixel bytes are scaled to [0, 1] before they reach the graph.
"""

import numpy as np
from pathlib import Path
from typing import List, Union

from .types import Sample, DatasetFormatError

MAGIC_IMAGES = 0x00000803
MAGIC_LABELS = 0x00000801

PathLike = Union[str, Path]


def _read_header(buf: bytes, n_fields: int, what: str) -> np.ndarray:
    n_bytes = 4 * n_fields
    if len(buf) < n_bytes:
        raise DatasetFormatError(f"Unexpected end of {what} file")
    return np.frombuffer(buf, dtype='>u4', count=n_fields).astype(np.int64)


def read_idx_images(path: PathLike) -> np.ndarray:
    """
    Read an IDX images file.

    Args:
        path: Path to the images file

    Returns:
        uint8 array of shape (count, rows, cols)
    """
    buf = Path(path).read_bytes()
    header = _read_header(buf[:4], 1, "data")
    if header[0] != MAGIC_IMAGES:
        raise DatasetFormatError("Incorrect data file header")

    magic, count, rows, cols = _read_header(buf, 4, "data")
    n_pixels = int(count * rows * cols)
    if len(buf) - 16 < n_pixels:
        raise DatasetFormatError("Unexpected end of data file")
    payload = np.frombuffer(buf[16:16 + n_pixels], dtype=np.uint8)
    return payload.reshape(int(count), int(rows), int(cols))


def read_idx_labels(path: PathLike) -> np.ndarray:
    """
    Read an IDX labels file.

    Returns:
        uint8 array of shape (count,)
    """
    buf = Path(path).read_bytes()
    header = _read_header(buf[:4], 1, "labels")
    if header[0] != MAGIC_LABELS:
        raise DatasetFormatError("Incorrect labels file header")

    magic, count = _read_header(buf, 2, "labels")
    count = int(count)
    if len(buf) - 8 < count:
        raise DatasetFormatError("Unexpected end of labels file")
    return np.frombuffer(buf[8:8 + count], dtype=np.uint8)


def load_idx_dataset(images_path: PathLike, labels_path: PathLike,
                     rows: int = 28, cols: int = 28, n_classes: int = 10) -> List[Sample]:
    """
    Load paired images/labels files into normalized samples.

    Args:
        images_path: IDX images file
        labels_path: IDX labels file
        rows, cols: Expected image extent
        n_classes: Labels must lie in [0, n_classes)

    Returns:
        List of Sample with features of length rows*cols in [0, 1]
    """
    images = read_idx_images(images_path)
    labels = read_idx_labels(labels_path)

    if images.shape[0] != labels.shape[0]:
        raise DatasetFormatError("Data and label files have different lengths")
    if images.shape[1:] != (rows, cols):
        raise DatasetFormatError(
            f"Unexpected image sizes: {images.shape[1]}x{images.shape[2]} (expected {rows}x{cols})"
        )
    if labels.size and int(labels.max()) >= n_classes:
        raise DatasetFormatError("Unexpected range on image label")

    features = images.reshape(images.shape[0], rows * cols).astype(np.float64) / 255.0
    return [Sample(features=features[i], label=int(labels[i])) for i in range(labels.shape[0])]

