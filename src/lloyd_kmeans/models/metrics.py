"""Run metrics for k-means performance comparison."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

METRICS_COLUMNS = [
    "label",
    "used_iterations",
    "total_seconds",
    "assignments_seconds",
    "centroids_seconds",
    "max_iteration_seconds",
    "num_points",
    "num_clusters",
    "max_iterations",
    "test_results",
]


class TestResult(IntEnum):
    """Outcome of comparing a run against a reference clustering."""

    __test__ = False  # keep pytest from collecting this enum

    FAILED = -1
    UNTESTED = 0
    PASSED = 1

    @property
    def display(self) -> str:
        """Text written to the metrics log."""
        return _TEST_RESULT_TEXT[self]


_TEST_RESULT_TEXT = {
    TestResult.FAILED: "FAILED!",
    TestResult.UNTESTED: "untested",
    TestResult.PASSED: "passed",
}


class RunState(str, Enum):
    """States of the convergence loop."""

    RUNNING = "running"
    CONVERGED = "converged"
    ITERATION_LIMIT_REACHED = "iteration_limit_reached"


@dataclass
class RunMetrics:
    """Timing and correctness statistics of a single run.

    Timings are wall-clock seconds accumulated over all iterations. The
    centroid initialization is not part of ``total_seconds``.

    Attributes:
        label: Free-form run label, usually naming the strategy
        num_points: Number of points clustered (N)
        num_clusters: Number of clusters (K)
        max_iterations: Iteration cap of the run
        assignment_seconds: Cumulative time spent in assignment phases
        centroids_seconds: Cumulative time spent in update phases
        total_seconds: Wall time of the whole convergence loop
        max_iteration_seconds: Wall time of the slowest single iteration
        used_iterations: Iterations actually executed
        test_result: Outcome of the optional reference comparison
    """

    label: str = "no-label"
    num_points: int = 0
    num_clusters: int = 0
    max_iterations: int = 0
    assignment_seconds: float = 0.0
    centroids_seconds: float = 0.0
    total_seconds: float = 0.0
    max_iteration_seconds: float = 0.0
    used_iterations: int = 0
    test_result: TestResult = TestResult.UNTESTED

    @property
    def hit_iteration_limit(self) -> bool:
        """Whether the run stopped because of the iteration cap."""
        return self.used_iterations >= self.max_iterations

    def record_iteration(
        self, assignment_seconds: float, centroids_seconds: float, iteration_seconds: float
    ) -> None:
        """Fold the timings of one finished iteration into the totals."""
        self.assignment_seconds += assignment_seconds
        self.centroids_seconds += centroids_seconds
        if iteration_seconds > self.max_iteration_seconds:
            self.max_iteration_seconds = iteration_seconds
        self.used_iterations += 1

    def to_row(self) -> list[str]:
        """Render the metrics as one CSV row matching METRICS_COLUMNS."""
        return [
            self.label,
            str(self.used_iterations),
            f"{self.total_seconds:f}",
            f"{self.assignment_seconds:f}",
            f"{self.centroids_seconds:f}",
            f"{self.max_iteration_seconds:f}",
            str(self.num_points),
            str(self.num_clusters),
            str(self.max_iterations),
            self.test_result.display,
        ]

    def __repr__(self) -> str:
        return (
            f"RunMetrics(label={self.label!r}, iterations={self.used_iterations}, "
            f"total={self.total_seconds:.3f}s, test={self.test_result.display})"
        )
