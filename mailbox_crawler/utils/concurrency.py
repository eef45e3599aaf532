"""
Bounded concurrent fan-out.

A fixed number of workers drain a shared queue of ``(index, item)`` pairs
and write each outcome into the slot of the item's input position.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class Outcome(Generic[R]):
    """Result of one item: a value or the error it failed with."""

    index: int
    value: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def bounded_gather(
    items: Sequence[T],
    worker: Callable[[int, T], Awaitable[R]],
    limit: int,
    fatal: Tuple[Type[BaseException], ...] = (),
) -> List[Outcome[R]]:
    """
    Run ``worker(index, item)`` over ``items`` with at most ``limit`` in flight.

    Args:
        items: Items to process
        worker: Coroutine function called with the item's index and the item
        limit: Maximum number of concurrent workers
        fatal: Exception types that abort the whole fan-out

    Returns:
        One Outcome per item, in input order

    Raises:
        The first exception of a ``fatal`` type; remaining workers are cancelled.
    """
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")

    queue: asyncio.Queue = asyncio.Queue()
    for index, item in enumerate(items):
        queue.put_nowait((index, item))

    results: List[Optional[Outcome[R]]] = [None] * len(items)

    async def run_worker() -> None:
        while True:
            try:
                index, item = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                value = await worker(index, item)
            except fatal:
                raise
            except Exception as e:
                results[index] = Outcome(index=index, error=e)
            else:
                results[index] = Outcome(index=index, value=value)

    tasks = [asyncio.ensure_future(run_worker()) for _ in range(min(limit, len(items)))]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    return results
