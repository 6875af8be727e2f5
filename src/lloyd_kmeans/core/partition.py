"""Block partitioning and execution of per-point work.

Points are cut into fixed-size contiguous blocks. Block boundaries depend
only on the number of points and the block size, never on the number of
workers, and partial results are always handed back in block order. Any
reduction that folds them left to right is therefore bit-identical for
every worker count.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition(n_points: int, block_size: int) -> list[slice]:
    """Split ``range(n_points)`` into contiguous slices of ``block_size``.

    The last block holds the remainder. Zero points give no blocks.
    """
    if block_size <= 0:
        raise ValueError(f"block_size must be positive, got {block_size}")
    return [
        slice(start, min(start + block_size, n_points))
        for start in range(0, n_points, block_size)
    ]


class BlockRunner:
    """Apply a function to every block, inline or on a thread pool.

    With one worker the blocks run in the calling thread. With more, they
    run on a ``ThreadPoolExecutor``; numpy releases the GIL inside its
    kernels so blocks overlap. Results always come back in block order.

    Example:
        >>> with BlockRunner(workers=4) as runner:
        ...     partials = runner.map(count_block, partition(n, 4096))
    """

    def __init__(self, workers: int = 1) -> None:
        if workers <= 0:
            raise ValueError(f"workers must be positive, got {workers}")
        self.workers = workers
        self._executor: ThreadPoolExecutor | None = None
        if workers > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="kmeans-block"
            )
            logger.debug(f"Started block thread pool with {workers} workers")

    def map(self, fn: Callable[[slice], T], blocks: Sequence[slice]) -> list[T]:
        """Run ``fn`` on each block and return the results in block order."""
        if self._executor is None or len(blocks) <= 1:
            return [fn(block) for block in blocks]
        return list(self._executor.map(fn, blocks))

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "BlockRunner":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"BlockRunner(workers={self.workers})"
