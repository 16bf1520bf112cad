import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence, TypeVar

from services.errors import UpstreamError

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


def map_ordered(func: Callable[[T], R], items: Sequence[T], max_workers: int = 4,
                timeout: Optional[float] = None) -> List[R]:
    """
    Run func over items concurrently and return results in input order.

    Each task writes into the slot of its input index, so completion order
    never leaks into the output. There is no cancellation: on timeout the
    batch fails as a whole and already-running calls finish in the background.
    Exceptions raised by func propagate; callers that want per-item isolation
    catch inside func.
    """
    if not items:
        return []

    workers = max(1, min(max_workers, len(items)))
    if workers == 1:
        return [func(item) for item in items]

    slots: List[Optional[R]] = [None] * len(items)
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix='analyzer')
    try:
        futures = {executor.submit(func, item): index for index, item in enumerate(items)}
        done, pending = wait(futures, timeout=timeout)
        if pending:
            logger.warning("Batch of %d tasks timed out with %d still running", len(items), len(pending))
            raise UpstreamError(f'Batch timed out after {timeout} seconds')

        for future in done:
            slots[futures[future]] = future.result()
    finally:
        executor.shutdown(wait=False)

    return slots
