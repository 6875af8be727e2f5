"""Custom exceptions for the lloyd_kmeans package.

This module defines a hierarchy of exceptions specific to k-means runs,
providing clearer error messages for operators and library users.
"""

from __future__ import annotations

from collections.abc import Sequence


class KMeansError(Exception):
    """Base exception for all lloyd_kmeans operations.

    This is the root exception that all other lloyd_kmeans exceptions inherit from.
    """


class ConfigurationError(KMeansError):
    """Raised when a run is configured with invalid parameters.

    This exception is raised when:
    - No input file is provided or it does not exist
    - A count (points, clusters, iterations, workers) is not positive
    - More clusters are requested than points were loaded
    - An unknown strategy or empty-cluster policy is requested
    """


class DatasetLoadError(KMeansError):
    """Raised when a dataset file cannot be read.

    This exception is raised when:
    - The file does not exist or cannot be opened
    - The file extension has no registered reader
    - The content cannot be decoded into points
    """


class DegenerateClusterError(KMeansError):
    """Raised when a cluster has no members after an assignment phase.

    Only raised when the run uses the ``raise`` empty-cluster policy.

    Attributes:
        cluster_ids: Indices of the clusters without members
        iteration: Zero-based iteration in which the clusters emptied
    """

    def __init__(self, cluster_ids: Sequence[int], iteration: int) -> None:
        self.cluster_ids = list(cluster_ids)
        self.iteration = iteration
        super().__init__(
            f"Clusters {self.cluster_ids} have no members after assignment "
            f"in iteration {iteration}"
        )
