from __future__ import annotations

import asyncio
from typing import Coroutine, TypeVar

T = TypeVar("T")

LATEST_VERSION = "latest"


def run_sync(coro: Coroutine[object, object, T]) -> T:
    """Wait for a coroutine on a private event loop and return its result.

    Raises whatever the coroutine raises. Must not be called from a thread
    that is already running an event loop; use the awaitable variant there.
    """
    return asyncio.run(coro)


def version_segment(version: int | None, default: str = LATEST_VERSION) -> str:
    # Version-addressed endpoints take a literal in place of the number.
    return default if version is None else str(version)


def object_path(object_type: int, object_id: int, segment: str) -> str:
    return f"/REST/objects/{object_type}/{object_id}/{segment}"
