"""Comparison of a clustering against a reference clustering."""

from __future__ import annotations

import logging
from pathlib import Path

from lloyd_kmeans.loaders import load_dataset
from lloyd_kmeans.models.dataset import Dataset
from lloyd_kmeans.models.metrics import TestResult

logger = logging.getLogger(__name__)


def compare_datasets(result: Dataset, reference: Dataset) -> TestResult:
    """Compare a clustered dataset with a reference position by position.

    Point ``n`` of the result is checked against point ``n`` of the
    reference: the coordinates must be exactly equal, then the cluster
    labels must match. The comparison stops at the first mismatch. Extra
    reference points are ignored. A reference with fewer points than the
    result cannot verify the run and gives UNTESTED.

    Returns:
        PASSED, FAILED or UNTESTED
    """
    num_points = result.n_points
    if reference.n_points < num_points:
        logger.warning(
            f"Comparison skipped. The reference dataset has only "
            f"{reference.n_points} records, but needs at least {num_points}"
        )
        return TestResult.UNTESTED

    for n in range(num_points):
        p = result.point(n)
        ref = reference.point(n)
        if ref.x != p.x or ref.y != p.y:
            logger.error(
                f"Test failure at {n + 1}: {p.x:.2f},{p.y:.2f} does not match "
                f"test point: {ref.x:.2f},{ref.y:.2f}"
            )
            return TestResult.FAILED
        if ref.cluster != p.cluster:
            logger.error(
                f"Test failure at {n + 1}: ({p.x:.2f},{p.y:.2f}) result cluster: "
                f"{p.cluster} does not match test: {ref.cluster}"
            )
            return TestResult.FAILED

    logger.info(f"All {num_points} points match the reference")
    return TestResult.PASSED


def compare_with_reference(result: Dataset, reference_path: str | Path) -> TestResult:
    """Load a reference dataset file and compare ``result`` against it.

    Only as many reference rows as the result has points are read.

    Raises:
        DatasetLoadError: If the reference file cannot be read
    """
    logger.info(f"Comparing results against test file: {reference_path}")
    reference = load_dataset(reference_path, max_points=max(result.n_points, 1))
    return compare_datasets(result, reference)
