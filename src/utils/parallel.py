"""Off-loop execution for blocking catalog scans."""
from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

T = TypeVar("T")

WORKER_PREFIX = "mediacat-scan"


async def run_in_executor(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Await ``func(*args, **kwargs)`` while it runs on a one-thread pool.

    The scan itself stays synchronous and ordered; only the caller's event
    loop is freed while the filesystem is walked.
    """

    loop = asyncio.get_running_loop()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix=WORKER_PREFIX) as pool:
        return await loop.run_in_executor(pool, lambda: func(*args, **kwargs))
