"""Summaries of the metrics log for comparing strategies."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from lloyd_kmeans.models.metrics import METRICS_COLUMNS

logger = logging.getLogger(__name__)


def load_metrics_frame(path: str | Path) -> pd.DataFrame:
    """Read a metrics log into a DataFrame.

    Raises:
        FileNotFoundError: If the log does not exist
        ValueError: If the log lacks expected columns
    """
    metrics_path = Path(path)
    if not metrics_path.is_file():
        raise FileNotFoundError(f"Metrics file not found: {metrics_path}")

    frame = pd.read_csv(metrics_path, dtype={"label": str})
    missing = [c for c in METRICS_COLUMNS if c not in frame.columns]
    if missing:
        raise ValueError(f"Metrics file {metrics_path} missing columns: {missing}")
    return frame


def summarize_runs(frame: pd.DataFrame, baseline: str | None = None) -> pd.DataFrame:
    """Aggregate runs per label.

    Columns: number of runs, mean and best total seconds, mean assignment and
    update seconds, mean iterations, and a ``speedup`` of the mean total time
    relative to the ``baseline`` label (NaN without a baseline).

    Raises:
        ValueError: If ``baseline`` does not name a label in ``frame``
    """
    summary = (
        frame.groupby("label", sort=True)
        .agg(
            runs=("total_seconds", "size"),
            mean_total_seconds=("total_seconds", "mean"),
            best_total_seconds=("total_seconds", "min"),
            mean_assignments_seconds=("assignments_seconds", "mean"),
            mean_centroids_seconds=("centroids_seconds", "mean"),
            mean_iterations=("used_iterations", "mean"),
        )
    )

    if baseline is None:
        summary["speedup"] = float("nan")
    else:
        if baseline not in summary.index:
            raise ValueError(
                f"Baseline label '{baseline}' not found. "
                f"Available labels: {', '.join(summary.index)}"
            )
        baseline_seconds = summary.loc[baseline, "mean_total_seconds"]
        summary["speedup"] = baseline_seconds / summary["mean_total_seconds"]

    logger.debug(f"Summarized {len(frame)} runs into {len(summary)} labels")
    return summary
