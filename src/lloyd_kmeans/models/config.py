"""Run configuration for lloyd_kmeans.

Three layers feed a run configuration, lowest priority first:

1. ``KMeansSettings``: environment variables (``KMEANS_*``) and ``.env``
2. An optional TOML file with a ``[run]`` table
3. Command line flags

Example TOML:
    [run]
    in_file = "data/points.csv"
    out_file = "out/clusters.csv"
    num_clusters = 15
    max_iterations = 10000
    strategy = "threaded"
    workers = 4
    label = "threaded-4"
"""

from __future__ import annotations

import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lloyd_kmeans.exceptions import ConfigurationError

DEFAULT_NUM_CLUSTERS = 15
DEFAULT_MAX_ITERATIONS = 10000
DEFAULT_MAX_POINTS = 5000
DEFAULT_BLOCK_SIZE = 4096


class Strategy(str, Enum):
    """Execution strategy for the per-point phases."""

    SERIAL = "serial"
    VECTORIZED = "vectorized"
    THREADED = "threaded"


class EmptyClusterPolicy(str, Enum):
    """What the update phase does with a cluster that has no members."""

    KEEP = "keep"
    RAISE = "raise"


class KMeansSettings(BaseSettings):
    """Environment defaults for k-means runs."""

    model_config = SettingsConfigDict(
        env_prefix="KMEANS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Root logging level")
    strategy: Strategy = Field(
        default=Strategy.VECTORIZED, description="Default execution strategy"
    )
    workers: int = Field(
        default_factory=lambda: os.cpu_count() or 1,
        gt=0,
        description="Worker threads for the threaded strategy",
    )
    block_size: int = Field(
        default=DEFAULT_BLOCK_SIZE, gt=0, description="Points per parallel block"
    )
    empty_cluster_policy: EmptyClusterPolicy = Field(
        default=EmptyClusterPolicy.KEEP,
        description="Handling of clusters without members",
    )


class KMeansConfig(BaseModel):
    """Validated configuration of a single run.

    Attributes:
        in_file: Dataset to cluster (must exist)
        out_file: Where to write the clustered points (skipped if None)
        test_file: Reference clustering to compare against (must exist if set)
        metrics_file: Metrics log to append to (skipped if None)
        label: Run label reported in the metrics
        max_points: Maximum number of points read from in_file
        num_clusters: Number of clusters (K)
        max_iterations: Iteration cap
        strategy: Execution strategy of the phases
        workers: Worker threads for the threaded strategy
        block_size: Points per block of parallel work
        empty_cluster_policy: Handling of clusters without members
    """

    in_file: Path
    out_file: Path | None = None
    test_file: Path | None = None
    metrics_file: Path | None = None
    label: str = "no-label"
    max_points: int = Field(default=DEFAULT_MAX_POINTS, gt=0)
    num_clusters: int = Field(default=DEFAULT_NUM_CLUSTERS, gt=0)
    max_iterations: int = Field(default=DEFAULT_MAX_ITERATIONS, gt=0)
    strategy: Strategy = Strategy.VECTORIZED
    workers: int = Field(default=1, gt=0)
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, gt=0)
    empty_cluster_policy: EmptyClusterPolicy = EmptyClusterPolicy.KEEP

    model_config = {"frozen": True}

    @field_validator("in_file", "test_file")
    @classmethod
    def validate_existing_file(cls, v: Path | None) -> Path | None:
        """Validate that input files exist."""
        if v is not None and not v.is_file():
            raise ValueError(f"File not found: {v}")
        return v

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        """Labels end up in a CSV cell, so they must be non-empty."""
        v = v.strip()
        if not v:
            raise ValueError("Label cannot be empty")
        return v


def load_settings() -> KMeansSettings:
    """Read KMeansSettings from the environment and ``.env``.

    Raises:
        ConfigurationError: If an environment value is invalid
    """
    try:
        return KMeansSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid KMEANS_* environment settings: {e}") from e


def load_config(path: str | Path) -> dict[str, Any]:
    """Read the ``[run]`` table of a TOML configuration file.

    Args:
        path: Path to the TOML file

    Returns:
        Raw option values, to be merged with CLI flags

    Raises:
        ConfigurationError: If the file is missing or not valid TOML
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    run = data.get("run", {})
    if not isinstance(run, dict):
        raise ConfigurationError(f"[run] in {config_path} must be a table")
    return run


def build_config(
    options: dict[str, Any], settings: KMeansSettings | None = None
) -> KMeansConfig:
    """Merge settings defaults with explicit options and validate.

    Options whose value is None are treated as not given.

    Raises:
        ConfigurationError: If validation fails
    """
    settings = settings or KMeansSettings()
    merged: dict[str, Any] = {
        "strategy": settings.strategy,
        "workers": settings.workers,
        "block_size": settings.block_size,
        "empty_cluster_policy": settings.empty_cluster_policy,
    }
    merged.update({k: v for k, v in options.items() if v is not None})

    if "in_file" not in merged:
        raise ConfigurationError("You must at least provide an input file")

    try:
        return KMeansConfig(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
