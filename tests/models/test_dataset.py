"""Tests for Point and Dataset."""

import numpy as np
import pytest

from lloyd_kmeans.models.dataset import UNASSIGNED, Dataset, Point


class TestDataset:
    """Test Dataset construction and accessors."""

    def test_from_points(self):
        dataset = Dataset.from_points(
            [Point(1.0, 2.0), Point(3.0, 4.0, cluster=2)], headers=["X", "Y"]
        )

        assert dataset.n_points == 2
        assert len(dataset) == 2
        assert dataset.point(0) == Point(1.0, 2.0, UNASSIGNED)
        assert dataset.point(1) == Point(3.0, 4.0, 2)
        assert dataset.headers == ["X", "Y"]

    def test_from_no_points(self):
        dataset = Dataset.from_points([])
        assert dataset.coords.shape == (0, 2)
        assert dataset.clusters.shape == (0,)

    def test_coerces_dtypes(self):
        dataset = Dataset(coords=[[1, 2], [3, 4]], clusters=[0, 1])
        assert dataset.coords.dtype == np.float64
        assert dataset.clusters.dtype == np.int64

    def test_rejects_bad_coords_shape(self):
        with pytest.raises(ValueError, match="coords must have shape"):
            Dataset(coords=np.zeros((3, 3)), clusters=np.zeros(3))

    def test_rejects_mismatched_clusters(self):
        with pytest.raises(ValueError, match="clusters must have shape"):
            Dataset(coords=np.zeros((3, 2)), clusters=np.zeros(2))

    def test_points_iterates_in_order(self, two_groups):
        points = list(two_groups.points())
        assert [[p.x, p.y] for p in points] == two_groups.coords.tolist()

    def test_reset_clusters(self, two_groups):
        two_groups.clusters[:] = 1
        two_groups.reset_clusters()
        assert two_groups.clusters.tolist() == [UNASSIGNED] * 6

    def test_copy_is_independent(self, two_groups):
        """Test that a copy does not share arrays with the original."""
        clone = two_groups.copy()
        clone.clusters[:] = 0
        clone.coords[0, 0] = 99.0

        assert two_groups.clusters.tolist() == [UNASSIGNED] * 6
        assert two_groups.coords[0, 0] == 0.0

    def test_point_is_frozen(self):
        point = Point(1.0, 2.0)
        with pytest.raises(AttributeError):
            point.x = 5.0  # type: ignore[misc]

    def test_repr(self, two_groups):
        assert repr(two_groups) == "Dataset(n_points=6, headers=None)"
