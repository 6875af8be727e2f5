"""Abstract base class for result writers.

This module defines the ResultWriter ABC that all result format writers must
implement. A result is the clustered point set: one row per point with its
coordinates and cluster label.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from lloyd_kmeans.models.dataset import Dataset

CLUSTER_HEADER = "Cluster"
_DEFAULT_COORD_HEADERS = ["x", "y"]


def result_headers(headers: list[str] | None) -> list[str]:
    """Column names for a result: the two coordinate headers plus ``Cluster``."""
    coord_headers = list(headers or [])[:2]
    coord_headers += _DEFAULT_COORD_HEADERS[len(coord_headers):]
    return coord_headers + [CLUSTER_HEADER]


def format_cluster_label(cluster: int) -> str:
    return f"cluster_{cluster}"


class ResultWriter(ABC):
    """Abstract base class for result writers.

    Supports writing clustered datasets to various formats.
    """

    @abstractmethod
    def write_to_path(self, dataset: Dataset, path: Path) -> None:
        """Write the clustered dataset to a file, replacing it if present.

        Args:
            dataset: Dataset with assigned clusters
            path: Destination file path

        Raises:
            IOError: If write fails
        """
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def supported_extensions(cls) -> list[str]:
        """Return list of supported file extensions.

        Returns:
            List of extensions (e.g., ['.csv'])
        """
        raise NotImplementedError
