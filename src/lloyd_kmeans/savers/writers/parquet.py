"""Parquet result writer implementation."""

import logging
from pathlib import Path

import numpy as np
import polars as pl

from lloyd_kmeans.models.dataset import Dataset
from lloyd_kmeans.savers.writers.base import ResultWriter, result_headers

logger = logging.getLogger(__name__)


class ParquetResultWriter(ResultWriter):
    """Writer for Parquet results.

    Output format: three columns, x and y as Float64 and the cluster label
    as Int64. Column names come from the dataset headers, defaulting to
    ``x``, ``y`` and ``Cluster``.
    """

    def write_to_path(self, dataset: Dataset, path: Path) -> None:
        """Write the clustered dataset to a Parquet file path.

        Args:
            dataset: Dataset with assigned clusters
            path: Destination file path

        Raises:
            IOError: If write fails
        """
        logger.debug(f"Writing Parquet result to: {path}")

        try:
            # Create parent directories if they don't exist
            path.parent.mkdir(parents=True, exist_ok=True)

            x_name, y_name, cluster_name = result_headers(dataset.headers)
            xs = np.ascontiguousarray(dataset.coords[:, 0])
            ys = np.ascontiguousarray(dataset.coords[:, 1])
            df = pl.DataFrame(
                {
                    x_name: pl.Series(xs, dtype=pl.Float64),
                    y_name: pl.Series(ys, dtype=pl.Float64),
                    cluster_name: pl.Series(dataset.clusters, dtype=pl.Int64),
                }
            )
            df.write_parquet(path)

            logger.debug(f"Successfully wrote {dataset.n_points} points to {path}")

        except (OSError, pl.exceptions.PolarsError) as e:
            error_msg = f"Failed to write Parquet result to {path}: {e}"
            logger.error(error_msg)
            raise IOError(error_msg) from e

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Return supported file extensions.

        Returns:
            List of supported extensions
        """
        return [".parquet"]
