"""CSV dataset reader implementation."""

import csv
import logging
from collections.abc import Iterable
from pathlib import Path

from lloyd_kmeans.exceptions import DatasetLoadError
from lloyd_kmeans.loaders.readers.base import DatasetReader, parse_cluster_label
from lloyd_kmeans.models.dataset import UNASSIGNED, Dataset, Point

logger = logging.getLogger(__name__)


class CSVDatasetReader(DatasetReader):
    """Reader for CSV point datasets.

    Expected format: a header row, then one point per row as ``x,y`` or
    ``x,y,cluster``. The cluster column is only read when the header names
    more than two columns. Reading stops at the first row with fewer than
    two fields.
    """

    def read_from_path(self, path: Path, max_points: int) -> Dataset:
        """Read points from a CSV file path.

        Args:
            path: Path to the CSV file
            max_points: Maximum number of points to read

        Returns:
            Loaded Dataset

        Raises:
            DatasetLoadError: If the file is missing, empty or malformed
        """
        logger.debug(f"Reading CSV dataset from: {path}")

        try:
            with open(path, "r", encoding="utf-8-sig", newline="") as f:
                dataset = self.read_rows(csv.reader(f), max_points, source=str(path))
        except (UnicodeDecodeError, csv.Error) as e:
            raise DatasetLoadError(f"Invalid CSV data in {path}: {e}") from e
        except OSError as e:
            raise DatasetLoadError(f"Cannot read the input file at {path}: {e}") from e

        logger.debug(f"Successfully read {dataset.n_points} points from {path}")
        return dataset

    def read_rows(
        self, rows: Iterable[list[str]], max_points: int, source: str = "<rows>"
    ) -> Dataset:
        """Build a dataset from already split CSV rows, header row first."""
        row_iter = iter(rows)
        header_row = next(row_iter, None)
        if header_row is None:
            raise DatasetLoadError(f"CSV file {source} is empty")

        headers = [h.strip() for h in header_row]
        has_cluster_column = len(headers) > 2

        points: list[Point] = []
        # header is line 1
        for line_number, row in enumerate(row_iter, start=2):
            if len(points) >= max_points:
                break

            if len(row) < 2:
                if any(field.strip() for field in row):
                    logger.warning(
                        f"Found non-empty trailing line {line_number} in {source}, "
                        f"will stop reading points now: {row}"
                    )
                break

            try:
                x = float(row[0])
                y = float(row[1])
            except ValueError as e:
                raise DatasetLoadError(
                    f"Invalid coordinates on line {line_number} of {source}: {row}"
                ) from e

            cluster = UNASSIGNED
            if has_cluster_column and len(row) > 2:
                cluster = parse_cluster_label(row[2])

            points.append(Point(x=x, y=y, cluster=cluster))

        return Dataset.from_points(points, headers=headers)

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Return supported file extensions.

        Returns:
            List of supported extensions
        """
        return [".csv"]
