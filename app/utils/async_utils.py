"""Utilities for handling async operations in Celery tasks."""

import asyncio
from concurrent.futures import ThreadPoolExecutor


def run_async(coro):
    """
    Run an async coroutine from a synchronous Celery task.

    Prefork workers have no running loop, so ``asyncio.run`` is used. When a
    loop is already running in this thread (eager mode inside an async app),
    the coroutine runs to completion on a helper thread with its own loop.

    Args:
        coro: The coroutine to run

    Returns:
        The result of the coroutine
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coro).result()
