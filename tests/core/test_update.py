"""Unit tests for the update phase."""

import logging

import numpy as np
import pytest

from lloyd_kmeans.core.partition import BlockRunner, partition
from lloyd_kmeans.core.update import (
    ClusterSums,
    accumulate_block_serial,
    accumulate_block_vectorized,
    calculate_centroids,
)
from lloyd_kmeans.exceptions import DegenerateClusterError
from lloyd_kmeans.models.config import EmptyClusterPolicy

KERNELS = [accumulate_block_serial, accumulate_block_vectorized]


@pytest.mark.parametrize("kernel", KERNELS)
class TestAccumulateBlock:
    """Tests for the per-block accumulation kernels."""

    def test_sums_and_counts(self, two_groups, kernel):
        """Test per-cluster sums over a block."""
        two_groups.clusters[:] = [0, 0, 0, 1, 1, 1]
        sums = kernel(two_groups.coords, two_groups.clusters, 2, slice(0, 6))

        assert sums.sum_x.tolist() == [1.0, 31.0]
        assert sums.sum_y.tolist() == [1.0, 31.0]
        assert sums.count.tolist() == [3, 3]

    def test_only_reads_its_block(self, two_groups, kernel):
        """Test that points outside the block are ignored."""
        two_groups.clusters[:] = [0, 0, 0, 1, 1, 1]
        sums = kernel(two_groups.coords, two_groups.clusters, 2, slice(2, 4))

        assert sums.count.tolist() == [1, 1]
        assert sums.sum_x.tolist() == [0.0, 10.0]

    def test_empty_cluster_has_zero_count(self, two_groups, kernel):
        """Test that clusters without points get zero accumulators."""
        two_groups.clusters[:] = 0
        sums = kernel(two_groups.coords, two_groups.clusters, 3, slice(0, 6))
        assert sums.count.tolist() == [6, 0, 0]
        assert sums.sum_x[1:].tolist() == [0.0, 0.0]

    @pytest.mark.parametrize("bad_label", [-1, 2])
    def test_rejects_out_of_range_label(self, two_groups, kernel, bad_label):
        """Test that both kernels reject labels outside [0, num_clusters)."""
        two_groups.clusters[:] = [0, 0, 0, 1, bad_label, 1]

        with pytest.raises(ValueError, match=f"Point 4 has label {bad_label}"):
            kernel(two_groups.coords, two_groups.clusters, 2, slice(0, 6))


class TestClusterSums:
    """Tests for ClusterSums merging."""

    def test_add(self):
        """Test that merging adds element-wise."""
        total = ClusterSums.zeros(2)
        total.add(ClusterSums(np.array([1.0, 2.0]), np.array([3.0, 4.0]), np.array([1, 2])))
        total.add(ClusterSums(np.array([0.5, 0.5]), np.array([0.5, 0.5]), np.array([1, 1])))

        assert total.sum_x.tolist() == [1.5, 2.5]
        assert total.sum_y.tolist() == [3.5, 4.5]
        assert total.count.tolist() == [2, 3]


class TestCalculateCentroids:
    """Tests for calculate_centroids."""

    def test_means(self, two_groups):
        """Test that centroids move to the member means."""
        two_groups.clusters[:] = [0, 0, 0, 1, 1, 1]
        centroids = np.zeros((2, 2))

        empty = calculate_centroids(two_groups.coords, two_groups.clusters, centroids)

        assert empty == []
        np.testing.assert_allclose(centroids, [[1 / 3, 1 / 3], [31 / 3, 31 / 3]])

    def test_does_not_touch_points(self, two_groups):
        """Test that coordinates and labels are left alone."""
        two_groups.clusters[:] = [0, 0, 0, 1, 1, 1]
        coords_before = two_groups.coords.copy()
        calculate_centroids(two_groups.coords, two_groups.clusters, np.zeros((2, 2)))

        np.testing.assert_array_equal(two_groups.coords, coords_before)
        assert two_groups.clusters.tolist() == [0, 0, 0, 1, 1, 1]

    def test_keep_policy_leaves_empty_centroid(self, two_groups, caplog):
        """Test that an empty cluster keeps its previous centroid and is reported."""
        two_groups.clusters[:] = [0, 0, 0, 1, 1, 1]
        centroids = np.array([[0.0, 0.0], [10.0, 10.0], [-7.0, 3.0]])

        with caplog.at_level(logging.WARNING, logger="lloyd_kmeans.core.update"):
            empty = calculate_centroids(
                two_groups.coords,
                two_groups.clusters,
                centroids,
                empty_cluster_policy=EmptyClusterPolicy.KEEP,
                iteration=4,
            )

        assert empty == [2]
        assert centroids[2].tolist() == [-7.0, 3.0]
        assert np.isfinite(centroids).all()
        assert "clusters [2] have no members" in caplog.text

    def test_raise_policy(self, two_groups):
        """Test that an empty cluster raises under the RAISE policy."""
        two_groups.clusters[:] = [0, 0, 0, 1, 1, 1]
        centroids = np.array([[0.0, 0.0], [10.0, 10.0], [-7.0, 3.0]])
        before = centroids.copy()

        with pytest.raises(DegenerateClusterError) as exc_info:
            calculate_centroids(
                two_groups.coords,
                two_groups.clusters,
                centroids,
                empty_cluster_policy=EmptyClusterPolicy.RAISE,
                iteration=3,
            )

        assert exc_info.value.cluster_ids == [2]
        assert exc_info.value.iteration == 3
        np.testing.assert_array_equal(centroids, before)

    @pytest.mark.parametrize("workers", [1, 2, 4])
    @pytest.mark.parametrize("kernel", KERNELS)
    def test_blocked_matches_single_pass_exactly(
        self, noisy_coords, make_dataset, kernel, workers
    ):
        """Test that block partials merged in order give bit-identical centroids."""
        dataset = make_dataset(noisy_coords)
        rng = np.random.default_rng(3)
        dataset.clusters[:] = rng.integers(0, 5, size=len(noisy_coords))
        blocks = partition(len(noisy_coords), 50)

        reference = np.zeros((5, 2))
        calculate_centroids(
            dataset.coords, dataset.clusters, reference,
            blocks=blocks, kernel=accumulate_block_serial,
        )

        centroids = np.zeros((5, 2))
        with BlockRunner(workers=workers) as runner:
            calculate_centroids(
                dataset.coords, dataset.clusters, centroids,
                blocks=blocks, runner=runner, kernel=kernel,
            )

        np.testing.assert_array_equal(centroids, reference)
