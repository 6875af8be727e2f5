"""Lloyd's k-means convergence loop with per-phase timing.

The engine alternates assignment and update phases until an assignment
changes no label or the iteration cap is reached. Every phase is timed
separately so runs with different strategies can be compared.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from lloyd_kmeans.core.assignment import (
    AssignKernel,
    assign_block_serial,
    assign_block_vectorized,
    assign_clusters,
)
from lloyd_kmeans.core.initializer import initialize_centroids
from lloyd_kmeans.core.partition import BlockRunner, partition
from lloyd_kmeans.core.update import (
    AccumulateKernel,
    accumulate_block_serial,
    accumulate_block_vectorized,
    calculate_centroids,
)
from lloyd_kmeans.exceptions import ConfigurationError
from lloyd_kmeans.models.config import (
    DEFAULT_BLOCK_SIZE,
    EmptyClusterPolicy,
    KMeansConfig,
    Strategy,
)
from lloyd_kmeans.models.dataset import Dataset
from lloyd_kmeans.models.metrics import RunMetrics, RunState

logger = logging.getLogger(__name__)

_KERNELS: dict[Strategy, tuple[AssignKernel, AccumulateKernel]] = {
    Strategy.SERIAL: (assign_block_serial, accumulate_block_serial),
    Strategy.VECTORIZED: (assign_block_vectorized, accumulate_block_vectorized),
    Strategy.THREADED: (assign_block_vectorized, accumulate_block_vectorized),
}


@dataclass
class KMeansResult:
    """Outcome of a k-means run.

    Attributes:
        state: Terminal state of the convergence loop
        centroids: Final centroids of shape (n_clusters, 2)
        metrics: Timing and iteration statistics
        last_changes: Label changes reported by the last assignment phase
    """

    state: RunState
    centroids: npt.NDArray[np.float64]
    metrics: RunMetrics
    last_changes: int

    @property
    def converged(self) -> bool:
        return self.state is RunState.CONVERGED


class KMeansEngine:
    """Run Lloyd's algorithm on a Dataset.

    Example:
        >>> engine = KMeansEngine(num_clusters=2, max_iterations=100)
        >>> result = engine.run(dataset)
        >>> result.metrics.used_iterations
        2
    """

    def __init__(
        self,
        num_clusters: int,
        max_iterations: int,
        strategy: Strategy = Strategy.VECTORIZED,
        workers: int = 1,
        block_size: int = DEFAULT_BLOCK_SIZE,
        empty_cluster_policy: EmptyClusterPolicy = EmptyClusterPolicy.KEEP,
        label: str = "no-label",
    ) -> None:
        """Initialize the engine.

        Args:
            num_clusters: Number of clusters (K), at least 1
            max_iterations: Iteration cap, 0 runs no phase at all
            strategy: Per-block kernels and worker layout
            workers: Worker threads, only used by the threaded strategy
            block_size: Points per block of parallel work
            empty_cluster_policy: Handling of clusters without members
            label: Run label copied into the metrics

        Raises:
            ConfigurationError: If a parameter is out of range
        """
        if num_clusters < 1:
            raise ConfigurationError(f"num_clusters must be at least 1, got {num_clusters}")
        if max_iterations < 0:
            raise ConfigurationError(
                f"max_iterations cannot be negative, got {max_iterations}"
            )
        if workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {workers}")
        if block_size < 1:
            raise ConfigurationError(f"block_size must be at least 1, got {block_size}")

        self.num_clusters = num_clusters
        self.max_iterations = max_iterations
        self.strategy = Strategy(strategy)
        self.workers = workers if self.strategy is Strategy.THREADED else 1
        self.block_size = block_size
        self.empty_cluster_policy = EmptyClusterPolicy(empty_cluster_policy)
        self.label = label
        self._assign_kernel, self._accumulate_kernel = _KERNELS[self.strategy]

    @classmethod
    def from_config(cls, config: KMeansConfig) -> "KMeansEngine":
        """Create an engine from a validated run configuration."""
        return cls(
            num_clusters=config.num_clusters,
            max_iterations=config.max_iterations,
            strategy=config.strategy,
            workers=config.workers,
            block_size=config.block_size,
            empty_cluster_policy=config.empty_cluster_policy,
            label=config.label,
        )

    def run(self, dataset: Dataset) -> KMeansResult:
        """Cluster ``dataset`` in place.

        The labels of ``dataset`` are overwritten by the assignment phases.
        Centroid initialization is not included in the measured total time.

        Args:
            dataset: Point store with at least ``num_clusters`` points

        Returns:
            KMeansResult with final centroids, metrics and terminal state

        Raises:
            ConfigurationError: If the dataset has fewer points than clusters
            DegenerateClusterError: If a cluster empties under the RAISE policy
        """
        num_points = dataset.n_points
        if num_points < self.num_clusters:
            raise ConfigurationError(
                f"Need at least {self.num_clusters} points for {self.num_clusters} "
                f"clusters, got {num_points}"
            )

        centroids = initialize_centroids(dataset, self.num_clusters)
        metrics = RunMetrics(
            label=self.label,
            num_points=num_points,
            num_clusters=self.num_clusters,
            max_iterations=self.max_iterations,
        )
        blocks = partition(num_points, self.block_size)
        coords, clusters = dataset.coords, dataset.clusters

        logger.info(
            f"Clustering {num_points} points into {self.num_clusters} clusters "
            f"(strategy={self.strategy.value}, workers={self.workers}, "
            f"blocks={len(blocks)}, max_iterations={self.max_iterations})"
        )

        changes = num_points
        iteration = 0
        state = RunState.RUNNING

        start_time = time.perf_counter()
        with BlockRunner(self.workers) as runner:
            while state is RunState.RUNNING:
                if changes == 0:
                    state = RunState.CONVERGED
                    break
                if iteration == self.max_iterations:
                    state = RunState.ITERATION_LIMIT_REACHED
                    break

                start_iteration = time.perf_counter()
                changes = assign_clusters(
                    coords,
                    clusters,
                    centroids,
                    blocks=blocks,
                    runner=runner,
                    kernel=self._assign_kernel,
                )
                assignment_seconds = time.perf_counter() - start_iteration

                start_centroids = time.perf_counter()
                calculate_centroids(
                    coords,
                    clusters,
                    centroids,
                    blocks=blocks,
                    runner=runner,
                    kernel=self._accumulate_kernel,
                    empty_cluster_policy=self.empty_cluster_policy,
                    iteration=iteration,
                )
                end_iteration = time.perf_counter()

                metrics.record_iteration(
                    assignment_seconds=assignment_seconds,
                    centroids_seconds=end_iteration - start_centroids,
                    iteration_seconds=end_iteration - start_iteration,
                )
                iteration += 1
                logger.debug(
                    f"Iteration {iteration}: {changes} points changed cluster "
                    f"(assignment {assignment_seconds:.6f}s)"
                )

        metrics.total_seconds = time.perf_counter() - start_time

        logger.info(
            f"Ended after {metrics.used_iterations} iterations with {changes} "
            f"changed clusters ({state.value})"
        )
        return KMeansResult(
            state=state, centroids=centroids, metrics=metrics, last_changes=changes
        )

    def __repr__(self) -> str:
        return (
            f"KMeansEngine(num_clusters={self.num_clusters}, "
            f"max_iterations={self.max_iterations}, strategy={self.strategy.value})"
        )
