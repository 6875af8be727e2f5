"""Core k-means phases and the convergence loop."""

from lloyd_kmeans.core.assignment import (
    assign_block_serial,
    assign_block_vectorized,
    assign_clusters,
)
from lloyd_kmeans.core.distance import euclidean_distance, euclidean_distances
from lloyd_kmeans.core.engine import KMeansEngine, KMeansResult
from lloyd_kmeans.core.initializer import initialize_centroids
from lloyd_kmeans.core.partition import BlockRunner, partition
from lloyd_kmeans.core.update import (
    ClusterSums,
    accumulate_block_serial,
    accumulate_block_vectorized,
    calculate_centroids,
)

__all__ = [
    # Engine
    "KMeansEngine",
    "KMeansResult",
    # Phases
    "initialize_centroids",
    "assign_clusters",
    "calculate_centroids",
    # Kernels
    "assign_block_serial",
    "assign_block_vectorized",
    "accumulate_block_serial",
    "accumulate_block_vectorized",
    "ClusterSums",
    # Distance
    "euclidean_distance",
    "euclidean_distances",
    # Parallelism
    "BlockRunner",
    "partition",
]
