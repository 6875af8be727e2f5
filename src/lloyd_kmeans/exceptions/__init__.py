"""lloyd_kmeans Exceptions Module.

This module contains exception classes used throughout the lloyd_kmeans library.
"""

from lloyd_kmeans.exceptions.core import (
    ConfigurationError,
    DatasetLoadError,
    DegenerateClusterError,
    KMeansError,
)

__all__ = [
    "ConfigurationError",
    "DatasetLoadError",
    "DegenerateClusterError",
    "KMeansError",
]
