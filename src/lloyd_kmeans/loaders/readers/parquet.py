"""Parquet dataset reader implementation."""

import logging
from pathlib import Path

import numpy as np
import polars as pl

from lloyd_kmeans.exceptions import DatasetLoadError
from lloyd_kmeans.loaders.readers.base import DatasetReader, parse_cluster_label
from lloyd_kmeans.models.dataset import UNASSIGNED, Dataset

logger = logging.getLogger(__name__)


class ParquetDatasetReader(DatasetReader):
    """Reader for Parquet point datasets.

    The first two columns hold x and y. An optional third column holds the
    cluster label, either as integers or as text like ``cluster_3``.
    """

    def read_from_path(self, path: Path, max_points: int) -> Dataset:
        """Read points from a Parquet file path.

        Args:
            path: Path to the Parquet file
            max_points: Maximum number of points to read

        Returns:
            Loaded Dataset

        Raises:
            DatasetLoadError: If the file is missing or has unusable columns
        """
        logger.debug(f"Reading Parquet dataset from: {path}")

        if not Path(path).is_file():
            raise DatasetLoadError(f"Cannot read the input file at {path}")

        try:
            df = pl.read_parquet(path, n_rows=max_points)
        except (pl.exceptions.PolarsError, OSError) as e:
            raise DatasetLoadError(f"Invalid Parquet data in {path}: {e}") from e

        if df.width < 2:
            raise DatasetLoadError(
                f"Parquet file {path} needs at least 2 columns, found {df.width}"
            )

        try:
            coords = (
                df.select(pl.col(df.columns[0]), pl.col(df.columns[1]))
                .cast(pl.Float64)
                .to_numpy()
            )
        except pl.exceptions.PolarsError as e:
            raise DatasetLoadError(f"Non-numeric coordinates in {path}: {e}") from e

        if np.isnan(coords).any():
            raise DatasetLoadError(f"Parquet file {path} has missing coordinates")

        if df.width > 2:
            cluster_column = df.get_column(df.columns[2])
            if cluster_column.dtype.is_integer():
                clusters = cluster_column.fill_null(UNASSIGNED).to_numpy()
            else:
                clusters = np.array(
                    [parse_cluster_label(v) for v in cluster_column.to_list()],
                    dtype=np.int64,
                )
        else:
            clusters = np.full(df.height, UNASSIGNED, dtype=np.int64)

        dataset = Dataset(coords=coords, clusters=clusters, headers=list(df.columns))
        logger.debug(f"Successfully read {dataset.n_points} points from {path}")
        return dataset

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Return supported file extensions.

        Returns:
            List of supported extensions
        """
        return [".parquet"]
