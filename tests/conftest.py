"""Shared fixtures for lloyd_kmeans tests."""

from pathlib import Path

import numpy as np
import pytest

from lloyd_kmeans.models.dataset import UNASSIGNED, Dataset


def _make_dataset(coords, headers=None) -> Dataset:
    coords = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
    return Dataset(
        coords=coords,
        clusters=np.full(len(coords), UNASSIGNED, dtype=np.int64),
        headers=headers,
    )


@pytest.fixture
def make_dataset():
    """Factory building an unassigned dataset from (x, y) pairs."""
    return _make_dataset


@pytest.fixture
def write_csv():
    """Factory writing a CSV file from a header line and raw data lines."""

    def _write(path: Path, rows: list[str], header: str = "X,Y") -> Path:
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def two_groups() -> Dataset:
    """Two well-separated groups of three points each."""
    return _make_dataset([(0, 0), (1, 0), (0, 1), (10, 10), (11, 10), (10, 11)])


@pytest.fixture
def duplicate_seeds() -> Dataset:
    """The first two points coincide, so two centroids start identical."""
    return _make_dataset([(0, 0), (0, 0), (5, 5)])


@pytest.fixture
def blob_coords() -> np.ndarray:
    """Three interleaved 2D blobs (300 points); points 0, 1, 2 come from different blobs."""
    rng = np.random.default_rng(42)
    centers = np.array([[0.0, 0.0], [10.0, 10.0], [20.0, 0.0]])
    coords = np.empty((300, 2))
    for i, center in enumerate(centers):
        coords[i::3] = rng.normal(size=(100, 2)) + center
    return coords


@pytest.fixture
def blobs(blob_coords) -> Dataset:
    return _make_dataset(blob_coords, headers=["X", "Y"])


@pytest.fixture
def noisy_coords() -> np.ndarray:
    """Uniform noise (500 points) that takes several iterations to settle."""
    rng = np.random.default_rng(7)
    return rng.uniform(0.0, 100.0, size=(500, 2))
