"""Data models for lloyd_kmeans."""

from lloyd_kmeans.models.config import (
    EmptyClusterPolicy,
    KMeansConfig,
    KMeansSettings,
    Strategy,
    build_config,
    load_config,
    load_settings,
)
from lloyd_kmeans.models.dataset import UNASSIGNED, Dataset, Point
from lloyd_kmeans.models.metrics import (
    METRICS_COLUMNS,
    RunMetrics,
    RunState,
    TestResult,
)

__all__ = [
    # Config
    "EmptyClusterPolicy",
    "KMeansConfig",
    "KMeansSettings",
    "Strategy",
    "build_config",
    "load_config",
    "load_settings",
    # Point store
    "UNASSIGNED",
    "Dataset",
    "Point",
    # Metrics
    "METRICS_COLUMNS",
    "RunMetrics",
    "RunState",
    "TestResult",
]
