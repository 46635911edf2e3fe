"""Tests for the holdout train/test splitter."""

import numpy as np
import pytest

from forecastrank.features.evaluation import train_test_split


class TestTrainTestSplit:
    """Tests for train_test_split."""

    def test_train_size_is_floor_of_ratio(self) -> None:
        """Test train_size = floor(n * ratio)."""
        split = train_test_split(np.arange(12, dtype=np.float64), train_ratio=0.8)

        assert split.train_size == 9
        assert split.test_size == 3

    @pytest.mark.parametrize(
        ("n", "ratio", "expected_train"),
        [(10, 0.5, 5), (10, 0.9, 9), (11, 0.75, 8), (100, 0.8, 80)],
    )
    def test_sizes(self, n: int, ratio: float, expected_train: int) -> None:
        split = train_test_split(np.arange(n, dtype=np.float64), ratio)

        assert split.train_size == expected_train
        assert split.train_size + split.test_size == n

    def test_order_preserving_contiguous_partition(self) -> None:
        """Test segments concatenate back to the original series."""
        values = [5.0, 1.0, 4.0, 2.0, 3.0, 9.0, 7.0, 8.0, 6.0, 0.0]
        split = train_test_split(values, train_ratio=0.7)

        np.testing.assert_array_equal(np.concatenate([split.train, split.test]), values)
        np.testing.assert_array_equal(split.train_indices, np.arange(7))
        np.testing.assert_array_equal(split.test_indices, [7, 8, 9])
        assert split.validate_no_leakage()

    def test_segments_are_read_only(self) -> None:
        split = train_test_split(np.arange(10, dtype=np.float64), 0.8)

        with pytest.raises(ValueError):
            split.train[0] = 99.0

    def test_source_not_aliased(self) -> None:
        values = np.arange(10, dtype=np.float64)
        split = train_test_split(values, 0.8)
        values[0] = 42.0

        assert split.train[0] == 0.0

    def test_empty_training_segment_raises(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            train_test_split([1.0], train_ratio=0.5)

    @pytest.mark.parametrize("ratio", [0.0, -0.1, 1.5])
    def test_invalid_ratio_raises(self, ratio: float) -> None:
        with pytest.raises(ValueError, match="train_ratio"):
            train_test_split(np.arange(10, dtype=np.float64), ratio)
