"""Assignment phase: move every point to its closest centroid."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

import numpy as np
import numpy.typing as npt

from lloyd_kmeans.core.distance import euclidean_distance, euclidean_distances
from lloyd_kmeans.core.partition import BlockRunner, partition

AssignKernel = Callable[
    [npt.NDArray[np.float64], npt.NDArray[np.int64], npt.NDArray[np.float64], slice],
    int,
]


def assign_block_serial(
    coords: npt.NDArray[np.float64],
    clusters: npt.NDArray[np.int64],
    centroids: npt.NDArray[np.float64],
    block: slice,
) -> int:
    """Assign the points of one block with a plain per-point loop.

    Ties go to the lowest centroid index: only a strictly smaller distance
    replaces the current minimum.

    Returns:
        Number of points in the block whose cluster changed
    """
    centroid_list = centroids.tolist()
    changes = 0
    for n, (px, py) in enumerate(coords[block].tolist(), start=block.start):
        min_distance = math.inf
        closest_cluster = -1
        for k, (cx, cy) in enumerate(centroid_list):
            distance = euclidean_distance(px, py, cx, cy)
            if distance < min_distance:
                min_distance = distance
                closest_cluster = k
        if clusters[n] != closest_cluster:
            clusters[n] = closest_cluster
            changes += 1
    return changes


def assign_block_vectorized(
    coords: npt.NDArray[np.float64],
    clusters: npt.NDArray[np.int64],
    centroids: npt.NDArray[np.float64],
    block: slice,
) -> int:
    """Assign the points of one block with numpy.

    ``np.argmin`` returns the first index of the minimum, matching the
    lowest-index tie-break of the serial kernel.

    Returns:
        Number of points in the block whose cluster changed
    """
    closest = np.argmin(euclidean_distances(coords[block], centroids), axis=1)
    current = clusters[block]
    changed = current != closest
    n_changed = int(np.count_nonzero(changed))
    if n_changed:
        current[changed] = closest[changed]
    return n_changed


def assign_clusters(
    coords: npt.NDArray[np.float64],
    clusters: npt.NDArray[np.int64],
    centroids: npt.NDArray[np.float64],
    *,
    blocks: Sequence[slice] | None = None,
    runner: BlockRunner | None = None,
    kernel: AssignKernel = assign_block_vectorized,
) -> int:
    """Relabel every point with the index of its closest centroid.

    Every block is evaluated against the same centroid snapshot, and
    ``centroids`` is not written to. Each block writes only its own slice
    of ``clusters`` and reports its own change count; the counts are summed
    after all blocks finished.

    Args:
        coords: Points of shape (n_points, 2)
        clusters: Labels of shape (n_points,), updated in place
        centroids: Centroids of shape (n_clusters, 2)
        blocks: Block partition of the points (one block if None)
        runner: Executes the blocks (inline if None)
        kernel: Per-block assignment function

    Returns:
        Number of points whose cluster changed
    """
    if blocks is None:
        blocks = partition(len(coords), max(len(coords), 1))

    snapshot = centroids.view()
    snapshot.flags.writeable = False

    def _assign(block: slice) -> int:
        return kernel(coords, clusters, snapshot, block)

    if runner is None:
        partial_changes = [_assign(block) for block in blocks]
    else:
        partial_changes = runner.map(_assign, blocks)
    return sum(partial_changes)
