"""CSV result writer implementation."""

import csv
import logging
from pathlib import Path
from typing import TextIO

from lloyd_kmeans.models.dataset import Dataset
from lloyd_kmeans.savers.writers.base import (
    ResultWriter,
    format_cluster_label,
    result_headers,
)

logger = logging.getLogger(__name__)


class CSVResultWriter(ResultWriter):
    """Writer for CSV results.

    Output format: a header row ``<x header>,<y header>,Cluster`` (``x`` and
    ``y`` when the dataset has no headers), then ``x,y,cluster_<k>`` per
    point. Coordinates use the shortest text that reads back to the same
    float.
    """

    def write_to_path(self, dataset: Dataset, path: Path) -> None:
        """Write the clustered dataset to a CSV file path.

        Args:
            dataset: Dataset with assigned clusters
            path: Destination file path

        Raises:
            IOError: If write fails
        """
        logger.debug(f"Writing CSV result to: {path}")

        try:
            # Create parent directories if they don't exist
            path.parent.mkdir(parents=True, exist_ok=True)

            with open(path, "w", encoding="utf-8", newline="") as f:
                self.write(dataset, f)

            logger.debug(f"Successfully wrote {dataset.n_points} points to {path}")

        except OSError as e:
            error_msg = f"Failed to write CSV result to {path}: {e}"
            logger.error(error_msg)
            raise IOError(error_msg) from e

    def write(self, dataset: Dataset, stream: TextIO) -> None:
        """Write the clustered dataset to an open text stream."""
        writer = csv.writer(stream, lineterminator="\n")
        writer.writerow(result_headers(dataset.headers))
        for (x, y), cluster in zip(dataset.coords.tolist(), dataset.clusters.tolist()):
            writer.writerow([repr(x), repr(y), format_cluster_label(cluster)])

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Return supported file extensions.

        Returns:
            List of supported extensions
        """
        return [".csv"]
