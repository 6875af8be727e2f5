"""Result and metrics savers for lloyd_kmeans."""

import logging
from pathlib import Path

from lloyd_kmeans.models.dataset import Dataset
from lloyd_kmeans.savers.metrics import (
    append_metrics,
    write_metrics_header,
    write_metrics_row,
)
from lloyd_kmeans.savers.writers import get_writer

logger = logging.getLogger(__name__)


def save_dataset(dataset: Dataset, path: str | Path) -> Path:
    """Write a clustered dataset, picking the format from the extension.

    An existing file at ``path`` is overwritten.

    Args:
        dataset: Dataset with assigned clusters
        path: Destination file path

    Returns:
        Path where the dataset was written

    Raises:
        IOError: If write fails
        ValueError: If the extension is not supported
    """
    output_path = Path(path)
    logger.info(f"Writing output to {output_path}")

    writer = get_writer(output_path)
    writer.write_to_path(dataset, output_path)

    logger.info(
        f"Successfully wrote {dataset.n_points} points (format: {output_path.suffix})"
    )
    return output_path


__all__ = [
    "append_metrics",
    "save_dataset",
    "write_metrics_header",
    "write_metrics_row",
]
