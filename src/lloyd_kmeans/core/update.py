"""Update phase: move every centroid to the mean of its members."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from lloyd_kmeans.core.partition import BlockRunner, partition
from lloyd_kmeans.exceptions import DegenerateClusterError
from lloyd_kmeans.models.config import EmptyClusterPolicy

logger = logging.getLogger(__name__)


@dataclass
class ClusterSums:
    """Per-cluster accumulators of one block (or of all blocks merged).

    Attributes:
        sum_x: Sum of x coordinates per cluster, shape (n_clusters,)
        sum_y: Sum of y coordinates per cluster, shape (n_clusters,)
        count: Number of points per cluster, shape (n_clusters,)
    """

    sum_x: npt.NDArray[np.float64]
    sum_y: npt.NDArray[np.float64]
    count: npt.NDArray[np.int64]

    @classmethod
    def zeros(cls, num_clusters: int) -> "ClusterSums":
        return cls(
            sum_x=np.zeros(num_clusters, dtype=np.float64),
            sum_y=np.zeros(num_clusters, dtype=np.float64),
            count=np.zeros(num_clusters, dtype=np.int64),
        )

    def add(self, other: "ClusterSums") -> None:
        self.sum_x += other.sum_x
        self.sum_y += other.sum_y
        self.count += other.count


AccumulateKernel = Callable[
    [npt.NDArray[np.float64], npt.NDArray[np.int64], int, slice], ClusterSums
]


def accumulate_block_serial(
    coords: npt.NDArray[np.float64],
    clusters: npt.NDArray[np.int64],
    num_clusters: int,
    block: slice,
) -> ClusterSums:
    """Sum the coordinates of one block per cluster, point by point.

    Raises:
        ValueError: If a label lies outside ``[0, num_clusters)``
    """
    sum_x = [0.0] * num_clusters
    sum_y = [0.0] * num_clusters
    count = [0] * num_clusters
    for n, ((x, y), k) in enumerate(
        zip(coords[block].tolist(), clusters[block].tolist()), start=block.start
    ):
        if not 0 <= k < num_clusters:
            raise ValueError(f"Point {n} has label {k}, expected 0..{num_clusters - 1}")
        sum_x[k] += x
        sum_y[k] += y
        count[k] += 1
    return ClusterSums(
        sum_x=np.array(sum_x, dtype=np.float64),
        sum_y=np.array(sum_y, dtype=np.float64),
        count=np.array(count, dtype=np.int64),
    )


def accumulate_block_vectorized(
    coords: npt.NDArray[np.float64],
    clusters: npt.NDArray[np.int64],
    num_clusters: int,
    block: slice,
) -> ClusterSums:
    """Sum the coordinates of one block per cluster with ``np.bincount``.

    ``np.bincount`` adds the weights in index order, so the sums equal the
    ones of the serial kernel bit for bit.
    """
    labels = clusters[block]
    block_coords = coords[block]
    if len(labels) and (labels.min() < 0 or labels.max() >= num_clusters):
        n = block.start + int(np.flatnonzero((labels < 0) | (labels >= num_clusters))[0])
        raise ValueError(
            f"Point {n} has label {clusters[n]}, expected 0..{num_clusters - 1}"
        )
    return ClusterSums(
        sum_x=np.bincount(labels, weights=block_coords[:, 0], minlength=num_clusters),
        sum_y=np.bincount(labels, weights=block_coords[:, 1], minlength=num_clusters),
        count=np.bincount(labels, minlength=num_clusters).astype(np.int64),
    )


def calculate_centroids(
    coords: npt.NDArray[np.float64],
    clusters: npt.NDArray[np.int64],
    centroids: npt.NDArray[np.float64],
    *,
    blocks: Sequence[slice] | None = None,
    runner: BlockRunner | None = None,
    kernel: AccumulateKernel = accumulate_block_vectorized,
    empty_cluster_policy: EmptyClusterPolicy = EmptyClusterPolicy.KEEP,
    iteration: int = 0,
) -> list[int]:
    """Overwrite each centroid with the mean of the points assigned to it.

    Every block fills private accumulators, which are merged afterwards in
    block order. Points are not modified.

    A cluster without members has no mean. With ``EmptyClusterPolicy.KEEP``
    its centroid stays where it was; with ``EmptyClusterPolicy.RAISE`` a
    DegenerateClusterError is raised before any centroid is written.

    Args:
        coords: Points of shape (n_points, 2)
        clusters: Labels of shape (n_points,), all in [0, n_clusters)
        centroids: Centroids of shape (n_clusters, 2), updated in place
        blocks: Block partition of the points (one block if None)
        runner: Executes the blocks (inline if None)
        kernel: Per-block accumulation function
        empty_cluster_policy: Handling of clusters without members
        iteration: Current iteration, reported with empty clusters

    Returns:
        Indices of clusters that had no members

    Raises:
        DegenerateClusterError: If a cluster is empty and the policy is RAISE
    """
    num_clusters = len(centroids)
    if blocks is None:
        blocks = partition(len(coords), max(len(coords), 1))

    def _accumulate(block: slice) -> ClusterSums:
        return kernel(coords, clusters, num_clusters, block)

    if runner is None:
        partials = [_accumulate(block) for block in blocks]
    else:
        partials = runner.map(_accumulate, blocks)

    totals = ClusterSums.zeros(num_clusters)
    for partial in partials:
        totals.add(partial)

    populated = totals.count > 0
    empty_clusters = np.flatnonzero(~populated).tolist()
    if empty_clusters:
        if empty_cluster_policy is EmptyClusterPolicy.RAISE:
            raise DegenerateClusterError(empty_clusters, iteration)
        logger.warning(
            f"Iteration {iteration}: clusters {empty_clusters} have no members, "
            f"keeping their previous centroids"
        )

    centroids[populated, 0] = totals.sum_x[populated] / totals.count[populated]
    centroids[populated, 1] = totals.sum_y[populated] / totals.count[populated]
    return empty_clusters
