"""Metrics log: one CSV row per run, appended across runs."""

import csv
import logging
from pathlib import Path
from typing import TextIO

from lloyd_kmeans.models.metrics import METRICS_COLUMNS, RunMetrics

logger = logging.getLogger(__name__)


def write_metrics_header(stream: TextIO) -> None:
    csv.writer(stream, lineterminator="\n").writerow(METRICS_COLUMNS)


def write_metrics_row(stream: TextIO, metrics: RunMetrics) -> None:
    csv.writer(stream, lineterminator="\n").writerow(metrics.to_row())


def append_metrics(metrics: RunMetrics, path: str | Path) -> Path:
    """Append the metrics of a run to a metrics log.

    The header row is written only when the log does not exist yet, so
    repeated runs with different strategies build up one comparable table.

    Args:
        metrics: Finished run metrics
        path: Metrics log path

    Returns:
        Path of the metrics log

    Raises:
        IOError: If the log cannot be written
    """
    metrics_path = Path(path)
    first_time = not metrics_path.exists()

    try:
        metrics_path.parent.mkdir(parents=True, exist_ok=True)
        with open(metrics_path, "a", encoding="utf-8", newline="") as f:
            if first_time:
                logger.info(f"Creating metrics file and adding headers: {metrics_path}")
                write_metrics_header(f)
            write_metrics_row(f, metrics)
    except OSError as e:
        error_msg = f"Failed to append metrics to {metrics_path}: {e}"
        logger.error(error_msg)
        raise IOError(error_msg) from e

    logger.info(f"Reported metrics to: {metrics_path}")
    return metrics_path
