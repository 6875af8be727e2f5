"""lloyd_kmeans - Lloyd's k-means on 2D points, instrumented for benchmarking.

This package clusters points with Lloyd's algorithm and times every phase so
serial, vectorized and threaded strategies can be compared run against run.

Usage:
    >>> from lloyd_kmeans import KMeansEngine, load_dataset, save_dataset
    >>>
    >>> dataset = load_dataset("points.csv", max_points=5000)
    >>> engine = KMeansEngine(num_clusters=15, max_iterations=10000, strategy="threaded", workers=4)
    >>> result = engine.run(dataset)
    >>> print(result.metrics.used_iterations, result.metrics.total_seconds)
    >>> save_dataset(dataset, "clusters.csv")
"""

# ============================================================================
# Main API
# ============================================================================

from lloyd_kmeans.core import KMeansEngine, KMeansResult
from lloyd_kmeans.comparison import compare_datasets, compare_with_reference
from lloyd_kmeans.loaders import load_dataset
from lloyd_kmeans.savers import append_metrics, save_dataset

# Data models
from lloyd_kmeans.models import (
    Dataset,
    EmptyClusterPolicy,
    KMeansConfig,
    Point,
    RunMetrics,
    RunState,
    Strategy,
    TestResult,
)

# Exceptions
from lloyd_kmeans.exceptions import (
    ConfigurationError,
    DatasetLoadError,
    DegenerateClusterError,
    KMeansError,
)

# ============================================================================
# Package metadata
# ============================================================================

__version__ = "0.1.0"

__all__ = [
    # Main API
    "KMeansEngine",
    "KMeansResult",
    "load_dataset",
    "save_dataset",
    "append_metrics",
    "compare_datasets",
    "compare_with_reference",
    # Data models
    "Dataset",
    "Point",
    "KMeansConfig",
    "Strategy",
    "EmptyClusterPolicy",
    "RunMetrics",
    "RunState",
    "TestResult",
    # Exceptions
    "KMeansError",
    "ConfigurationError",
    "DatasetLoadError",
    "DegenerateClusterError",
]
