"""Command line interface for lloyd_kmeans.

Usage:
    kmeans-bench run -f data.csv [-o OUTPUT.csv] [-i MAX_ITERATIONS] [-n MAX_POINTS]
                     [-k NUM_CLUSTERS] [-l LABEL] [-t TESTFILE.csv] [-m METRICS.csv]
                     [--strategy {serial,vectorized,threaded}] [--workers N]
    kmeans-bench report METRICS.csv [--baseline LABEL]
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from lloyd_kmeans.comparison import compare_with_reference
from lloyd_kmeans.core.engine import KMeansEngine
from lloyd_kmeans.exceptions import ConfigurationError, KMeansError
from lloyd_kmeans.loaders import load_dataset
from lloyd_kmeans.models.config import (
    EmptyClusterPolicy,
    KMeansConfig,
    KMeansSettings,
    Strategy,
    build_config,
    load_config,
    load_settings,
)
from lloyd_kmeans.models.metrics import RunMetrics
from lloyd_kmeans.reporting import load_metrics_frame, summarize_runs
from lloyd_kmeans.savers import append_metrics, save_dataset
from lloyd_kmeans.savers.metrics import write_metrics_header, write_metrics_row

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kmeans-bench",
        description="Lloyd's k-means on 2D points, timed per phase",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: KMEANS_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Cluster a dataset and report timings")
    run.add_argument("-f", "--in-file", dest="in_file", help="Input dataset (.csv or .parquet)")
    run.add_argument("-o", "--out-file", dest="out_file", help="Output file for clustered points")
    run.add_argument("-i", "--max-iterations", dest="max_iterations", type=int)
    run.add_argument("-n", "--max-points", dest="max_points", type=int)
    run.add_argument("-k", "--num-clusters", dest="num_clusters", type=int)
    run.add_argument("-l", "--label", dest="label", help="Run label for the metrics log")
    run.add_argument("-t", "--test-file", dest="test_file", help="Reference clustering to compare against")
    run.add_argument("-m", "--metrics-file", dest="metrics_file", help="Metrics log to append to")
    run.add_argument(
        "--strategy", choices=[s.value for s in Strategy], help="Execution strategy"
    )
    run.add_argument("--workers", type=int, help="Worker threads for the threaded strategy")
    run.add_argument("--block-size", dest="block_size", type=int, help="Points per block")
    run.add_argument(
        "--empty-cluster-policy",
        dest="empty_cluster_policy",
        choices=[p.value for p in EmptyClusterPolicy],
    )
    run.add_argument("--config", help="TOML file with a [run] table")

    report = subparsers.add_parser("report", help="Summarize a metrics log")
    report.add_argument("metrics_file", help="Metrics log written by 'run -m'")
    report.add_argument("--baseline", help="Label to compute speedups against")

    return parser


_RUN_OPTIONS = [
    "in_file",
    "out_file",
    "max_iterations",
    "max_points",
    "num_clusters",
    "label",
    "test_file",
    "metrics_file",
    "strategy",
    "workers",
    "block_size",
    "empty_cluster_policy",
]


def config_from_args(args: argparse.Namespace, settings: KMeansSettings) -> KMeansConfig:
    """Merge the TOML file (if any) with CLI flags; flags win."""
    options = load_config(args.config) if args.config else {}
    options.update(
        {name: getattr(args, name) for name in _RUN_OPTIONS if getattr(args, name) is not None}
    )
    return build_config(options, settings)


def log_config(config: KMeansConfig) -> None:
    logger.info("Config:")
    logger.info(f"Input file    : {config.in_file}")
    logger.info(f"Output file   : {config.out_file}")
    logger.info(f"Test file     : {config.test_file}")
    logger.info(f"Metrics file  : {config.metrics_file}")
    logger.info(f"Num clusters  : {config.num_clusters}")
    logger.info(f"Max points    : {config.max_points}")
    logger.info(f"Max iterations: {config.max_iterations}")
    logger.info(f"Strategy      : {config.strategy.value} (workers={config.workers})")


def run_command(config: KMeansConfig) -> RunMetrics:
    """Load, cluster, write, compare and report according to ``config``."""
    log_config(config)

    dataset = load_dataset(config.in_file, config.max_points)
    engine = KMeansEngine.from_config(config)
    result = engine.run(dataset)
    metrics = result.metrics

    if config.out_file is not None:
        save_dataset(dataset, config.out_file)
    else:
        logger.info("No output file given, skipping result output")

    if config.test_file is not None:
        metrics.test_result = compare_with_reference(dataset, config.test_file)

    if config.metrics_file is not None:
        append_metrics(metrics, config.metrics_file)

    write_metrics_header(sys.stdout)
    write_metrics_row(sys.stdout, metrics)
    return metrics


def report_command(metrics_file: str, baseline: str | None) -> None:
    summary = summarize_runs(load_metrics_frame(metrics_file), baseline=baseline)
    with pd.option_context("display.width", 200, "display.max_columns", None):
        print(summary.to_string(float_format=lambda v: f"{v:.6f}"))


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging(args.log_level or "INFO")
        logger.error(f"Error: {e}")
        return 1
    configure_logging(args.log_level or settings.log_level)

    try:
        if args.command == "run":
            run_command(config_from_args(args, settings))
        else:
            report_command(args.metrics_file, args.baseline)
    except (KMeansError, OSError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
