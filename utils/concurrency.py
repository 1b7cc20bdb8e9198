"""
Fan-out helper for independent blocking calls.

Each Todoist request is a separate network round trip, so batches are run on
a thread pool and collected without failing fast: one call raising never
hides the outcome of the others.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_WORKERS = 10


@dataclass
class Settled(Generic[T]):
    """Outcome of one call: either a value or the exception it raised."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def settle_all(
    fn: Callable[[Any], T],
    items: Iterable[Any],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[Settled[T]]:
    """
    Call ``fn`` on every item concurrently and wait for all of them.

    Returns one Settled per item, in input order regardless of completion
    order.
    """
    items = list(items)
    if not items:
        return []

    workers = max(1, min(max_workers, len(items)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(fn, item) for item in items]

        outcomes: list[Settled[T]] = []
        for future in futures:
            try:
                outcomes.append(Settled(value=future.result()))
            except Exception as e:
                outcomes.append(Settled(error=e))

    return outcomes
