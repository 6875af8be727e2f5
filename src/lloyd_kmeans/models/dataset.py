"""Point store for k-means runs.

Points are kept column-wise in numpy arrays so the clustering phases can
work on whole blocks at a time. Headers travel with the points instead of
living in module-level state.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

UNASSIGNED = -1


@dataclass(frozen=True)
class Point:
    """A single 2D point with its cluster label.

    Attributes:
        x: First coordinate
        y: Second coordinate
        cluster: Cluster index, or -1 when unassigned
    """

    x: float
    y: float
    cluster: int = UNASSIGNED


@dataclass
class Dataset:
    """Ordered sequence of points plus the column headers they were read with.

    Attributes:
        coords: Coordinates of shape (n_points, 2), float64
        clusters: Cluster labels of shape (n_points,), int64
        headers: Column headers from the source file, if any
    """

    coords: npt.NDArray[np.float64]
    clusters: npt.NDArray[np.int64]
    headers: list[str] | None = field(default=None)

    def __post_init__(self) -> None:
        self.coords = np.ascontiguousarray(self.coords, dtype=np.float64)
        self.clusters = np.ascontiguousarray(self.clusters, dtype=np.int64)

        if self.coords.ndim != 2 or self.coords.shape[1] != 2:
            raise ValueError(
                f"coords must have shape (n_points, 2), got {self.coords.shape}"
            )
        if self.clusters.shape != (self.coords.shape[0],):
            raise ValueError(
                f"clusters must have shape ({self.coords.shape[0]},), "
                f"got {self.clusters.shape}"
            )

    @classmethod
    def from_points(
        cls, points: Iterable[Point], headers: list[str] | None = None
    ) -> "Dataset":
        """Build a dataset from Point records."""
        points = list(points)
        coords = np.array([(p.x, p.y) for p in points], dtype=np.float64)
        clusters = np.array([p.cluster for p in points], dtype=np.int64)
        return cls(coords=coords.reshape(len(points), 2), clusters=clusters, headers=headers)

    @property
    def n_points(self) -> int:
        """Number of points in the store."""
        return int(self.coords.shape[0])

    def point(self, index: int) -> Point:
        """Snapshot of the point at ``index``."""
        x, y = self.coords[index]
        return Point(x=float(x), y=float(y), cluster=int(self.clusters[index]))

    def points(self) -> Iterator[Point]:
        for index in range(self.n_points):
            yield self.point(index)

    def reset_clusters(self) -> None:
        """Mark every point as unassigned."""
        self.clusters.fill(UNASSIGNED)

    def copy(self) -> "Dataset":
        return Dataset(
            coords=self.coords.copy(),
            clusters=self.clusters.copy(),
            headers=list(self.headers) if self.headers is not None else None,
        )

    def __len__(self) -> int:
        return self.n_points

    def __repr__(self) -> str:
        return f"Dataset(n_points={self.n_points}, headers={self.headers})"
