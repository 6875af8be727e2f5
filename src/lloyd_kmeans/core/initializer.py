"""Initial centroid selection."""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from lloyd_kmeans.models.dataset import Dataset


def initialize_centroids(dataset: Dataset, num_clusters: int) -> npt.NDArray[np.float64]:
    """Use the first ``num_clusters`` points as the initial centroids.

    Random sampling or k-means++ would usually give better starting points,
    but taking the first K points keeps runs repeatable, so timings of
    different strategies stay comparable.

    Duplicate coordinates among the first K points give duplicate centroids.
    The higher-index duplicate then never wins a point and ends up empty.

    Args:
        dataset: Point store with at least ``num_clusters`` points
        num_clusters: Number of clusters (K)

    Returns:
        New centroid array of shape (num_clusters, 2)
    """
    if num_clusters > dataset.n_points:
        raise ValueError(
            f"Cannot pick {num_clusters} initial centroids from {dataset.n_points} points"
        )
    return dataset.coords[:num_clusters].copy()
