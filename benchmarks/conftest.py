"""Shared pytest fixtures for benchmarks."""

import numpy as np
import pytest

from lloyd_kmeans import Dataset


@pytest.fixture
def synthetic_points() -> np.ndarray:
    """Create 20,000 points scattered around 15 centers."""
    rng = np.random.default_rng(42)
    centers = rng.uniform(0.0, 1000.0, size=(15, 2))
    labels = rng.integers(0, len(centers), size=20_000)
    return centers[labels] + rng.normal(scale=25.0, size=(20_000, 2))


@pytest.fixture
def make_points():
    """Factory slicing the synthetic points into an unassigned dataset."""

    def _make(coords: np.ndarray) -> Dataset:
        return Dataset(
            coords=coords,
            clusters=np.full(len(coords), -1, dtype=np.int64),
            headers=["X", "Y"],
        )

    return _make
