"""Benchmark the k-means engine across strategies."""

import pytest

from lloyd_kmeans import KMeansEngine, Strategy
from lloyd_kmeans.core.assignment import assign_clusters
from lloyd_kmeans.core.initializer import initialize_centroids
from lloyd_kmeans.core.partition import BlockRunner, partition
from lloyd_kmeans.core.update import calculate_centroids


@pytest.mark.benchmark
@pytest.mark.parametrize(
    "strategy, workers",
    [
        (Strategy.VECTORIZED, 1),
        (Strategy.THREADED, 2),
        (Strategy.THREADED, 4),
        (Strategy.THREADED, 8),
    ],
)
@pytest.mark.parametrize("data_size", [1000, 5000, 20000])
def bench_engine_run(benchmark, synthetic_points, make_points, strategy, workers, data_size):
    """Benchmark a full run with a fixed iteration cap."""
    engine = KMeansEngine(
        num_clusters=15,
        max_iterations=20,
        strategy=strategy,
        workers=workers,
        block_size=1024,
    )
    dataset = make_points(synthetic_points[:data_size])

    def _run():
        return engine.run(dataset.copy())

    result = benchmark(_run)
    assert result.metrics.used_iterations > 0


@pytest.mark.benchmark
@pytest.mark.parametrize("data_size", [500, 2000])
def bench_engine_run_serial(benchmark, synthetic_points, make_points, data_size):
    """Benchmark the pure-Python kernels, the slow baseline."""
    engine = KMeansEngine(num_clusters=15, max_iterations=5, strategy=Strategy.SERIAL)
    dataset = make_points(synthetic_points[:data_size])

    def _run():
        return engine.run(dataset.copy())

    result = benchmark(_run)
    assert result.metrics.used_iterations > 0


@pytest.mark.benchmark
@pytest.mark.parametrize("workers", [1, 4])
@pytest.mark.parametrize("block_size", [256, 4096])
def bench_assignment_phase(benchmark, synthetic_points, make_points, workers, block_size):
    """Benchmark a single assignment phase."""
    dataset = make_points(synthetic_points)
    centroids = initialize_centroids(dataset, 15)
    blocks = partition(dataset.n_points, block_size)

    with BlockRunner(workers) as runner:

        def _assign():
            dataset.reset_clusters()
            return assign_clusters(
                dataset.coords, dataset.clusters, centroids, blocks=blocks, runner=runner
            )

        changes = benchmark(_assign)

    assert changes == dataset.n_points


@pytest.mark.benchmark
@pytest.mark.parametrize("workers", [1, 4])
def bench_update_phase(benchmark, synthetic_points, make_points, workers):
    """Benchmark a single update phase."""
    dataset = make_points(synthetic_points)
    centroids = initialize_centroids(dataset, 15)
    blocks = partition(dataset.n_points, 1024)

    with BlockRunner(workers) as runner:
        assign_clusters(dataset.coords, dataset.clusters, centroids, blocks=blocks, runner=runner)

        def _update():
            return calculate_centroids(
                dataset.coords, dataset.clusters, centroids.copy(), blocks=blocks, runner=runner
            )

        empty = benchmark(_update)

    assert empty == []
