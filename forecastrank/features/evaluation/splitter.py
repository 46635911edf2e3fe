"""Holdout train/test splitter.

CRITICAL: Respects temporal order - the training segment is always a prefix
of the series and the test segment is the remaining suffix.

    train_size = floor(n * train_ratio)
    train = series[0:train_size], test = series[train_size:n]
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

FloatArray = np.ndarray[Any, np.dtype[np.floating[Any]]]


@dataclass(frozen=True)
class TrainTestSplit:
    """A single contiguous train/test partition.

    Attributes:
        train: Training prefix of the series.
        test: Held-out suffix of the series.
    """

    train: FloatArray
    test: FloatArray

    @property
    def train_size(self) -> int:
        """Number of training observations."""
        return len(self.train)

    @property
    def test_size(self) -> int:
        """Number of held-out observations."""
        return len(self.test)

    @property
    def train_indices(self) -> np.ndarray[Any, np.dtype[np.intp]]:
        """Positions of the training segment in the full series."""
        return np.arange(0, self.train_size)

    @property
    def test_indices(self) -> np.ndarray[Any, np.dtype[np.intp]]:
        """Positions of the test segment in the full series."""
        return np.arange(self.train_size, self.train_size + self.test_size)

    def validate_no_leakage(self) -> bool:
        """Check the segments are contiguous and non-overlapping.

        Returns:
            True if the last training index immediately precedes the first
            test index (or the test segment is empty).
        """
        if self.test_size == 0:
            return True
        train_set = set(self.train_indices.tolist())
        test_set = set(self.test_indices.tolist())
        return not (train_set & test_set) and int(self.test_indices[0]) == self.train_size


def train_test_split(
    values: Sequence[float] | FloatArray,
    train_ratio: float,
) -> TrainTestSplit:
    """Split a series into a training prefix and a test suffix.

    Args:
        values: Series values in order.
        train_ratio: Fraction of observations used for training, in (0, 1].

    Returns:
        TrainTestSplit with read-only copies of both segments.

    Raises:
        ValueError: If the ratio is out of range or the training segment
            would be empty.
    """
    if not 0.0 < train_ratio <= 1.0:
        raise ValueError(f"train_ratio must be in (0, 1], got {train_ratio}")

    x = np.array(values, dtype=np.float64)
    train_size = math.floor(len(x) * train_ratio)
    if train_size < 1:
        raise ValueError(
            f"Training segment would be empty: n={len(x)}, train_ratio={train_ratio}"
        )

    train = x[:train_size].copy()
    test = x[train_size:].copy()
    train.flags.writeable = False
    test.flags.writeable = False
    return TrainTestSplit(train=train, test=test)
