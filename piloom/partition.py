import logging
from dataclasses import dataclass
from typing import Iterator, List

from .errors import InvalidInputError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkRange:
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))


def partition(iteration_count: int, worker_count: int) -> List[WorkRange]:
    if isinstance(worker_count, bool) or not isinstance(worker_count, int) or worker_count < 1:
        raise InvalidInputError(f"worker count must be a positive integer, got {worker_count!r}")
    if isinstance(iteration_count, bool) or not isinstance(iteration_count, int) or iteration_count < 0:
        raise InvalidInputError(f"iteration count must be a non-negative integer, got {iteration_count!r}")
    base, remainder = divmod(iteration_count, worker_count)
    ranges = []
    start = 0
    for i in range(worker_count):
        size = base + 1 if i < remainder else base
        ranges.append(WorkRange(start, start + size))
        start += size
    logger.debug("ranges: %s", [(r.start, r.end) for r in ranges])
    return ranges
