"""Asynchronous operation utilities"""

import asyncio
import threading
from typing import Any, Awaitable, Callable, Coroutine, Optional, TypeVar

T = TypeVar('T')


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run async coroutine in sync context

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is None or not loop.is_running():
        return asyncio.run(coro)

    # Already in async context, run on a private loop in a worker thread
    result = None
    exception = None

    def run_in_thread():
        nonlocal result, exception
        try:
            result = asyncio.run(coro)
        except BaseException as e:
            exception = e

    thread = threading.Thread(target=run_in_thread)
    thread.start()
    thread.join()

    if exception:
        raise exception
    return result


async def poll_until(probe: Callable[[], Awaitable[T]],
                     done: Callable[[T], bool],
                     interval: float = 5.0,
                     backoff: float = 1.5,
                     max_interval: float = 30.0,
                     on_result: Optional[Callable[[T], None]] = None,
                     sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep) -> T:
    """
    Call ``probe`` until ``done`` accepts its result, backing off between calls

    Args:
        probe: Coroutine function producing a result
        done: Predicate deciding whether polling can stop
        interval: Initial delay between probes
        backoff: Delay multiplier
        max_interval: Upper bound of the delay
        on_result: Callback invoked with every result
        sleep: Sleep implementation

    Returns:
        First result accepted by ``done``

    Exceptions raised by ``probe`` propagate; wrap the call in
    ``asyncio.wait_for`` to bound the total time.
    """
    delay = interval
    while True:
        result = await probe()
        if on_result:
            on_result(result)
        if done(result):
            return result
        await sleep(delay)
        delay = min(delay * backoff, max_interval)
