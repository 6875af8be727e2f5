"""Abstract base class for dataset readers.

This module defines the DatasetReader ABC that all dataset format readers must
implement, plus the cluster label parsing they share.
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path

from lloyd_kmeans.models.dataset import UNASSIGNED, Dataset

_TRAILING_INT = re.compile(r"(-?\d+)\s*$")


def parse_cluster_label(value: object) -> int:
    """Parse a cluster label such as ``cluster_3``, ``3`` or ``cluster_-1``.

    The label is the trailing integer of the text. Values without one are
    treated as unassigned.
    """
    if value is None:
        return UNASSIGNED
    if isinstance(value, int):
        return value
    match = _TRAILING_INT.search(str(value))
    if match is None:
        return UNASSIGNED
    return int(match.group(1))


class DatasetReader(ABC):
    """Abstract base class for dataset readers.

    Supports reading point datasets from various formats.
    """

    @abstractmethod
    def read_from_path(self, path: Path, max_points: int) -> Dataset:
        """Read at most ``max_points`` points from a file.

        Rows beyond ``max_points`` are ignored.

        Args:
            path: Source file path
            max_points: Maximum number of points to read

        Returns:
            Loaded Dataset with unassigned points labelled -1

        Raises:
            DatasetLoadError: If the file is missing or its content is invalid
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
