from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Callable, List


def join_all(*calls: Callable[[], Any]) -> List[Any]:
    """Run ``calls`` concurrently and return their results in order.

    Every call is allowed to finish. Only then is the first failure, in
    argument order, re-raised; there is no fail-fast and no cancellation.
    """
    if not calls:
        return []
    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
        wait(futures)
    for fut in futures:
        exc = fut.exception()
        if exc is not None:
            raise exc
    return [fut.result() for fut in futures]
