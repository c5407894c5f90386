"""Concurrent Fan-Out — run independent store calls together, fail them together.

Invariants:
    - Results come back in argument order, whatever order the calls finish in
    - If any call fails, or the caller is cancelled, every sibling still pending
      is cancelled and awaited before the exception propagates
"""

import asyncio
from typing import Any, Awaitable


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
