"""Dataset loaders for lloyd_kmeans.

The format is picked from the file extension:
- ``.csv``: CSVDatasetReader
- ``.parquet``: ParquetDatasetReader
"""

import logging
from pathlib import Path

from lloyd_kmeans.exceptions import DatasetLoadError
from lloyd_kmeans.loaders.readers import get_reader
from lloyd_kmeans.models.dataset import Dataset

logger = logging.getLogger(__name__)


def load_dataset(path: str | Path, max_points: int) -> Dataset:
    """Load at most ``max_points`` points from a dataset file.

    Args:
        path: Dataset file path
        max_points: Maximum number of points; extra rows are ignored

    Returns:
        Loaded Dataset

    Raises:
        DatasetLoadError: If the file is missing, unsupported or malformed
    """
    dataset_path = Path(path)
    if not dataset_path.exists():
        raise DatasetLoadError(f"Dataset file not found: {dataset_path}")

    logger.info(f"Loading dataset from: {dataset_path}")
    reader = get_reader(dataset_path)
    dataset = reader.read_from_path(dataset_path, max_points)
    logger.info(
        f"Loaded {dataset.n_points} points (format: {dataset_path.suffix}, "
        f"max_points: {max_points})"
    )
    return dataset


__all__ = ["load_dataset"]
