"""Fire-and-forget side effects that run after the response is produced."""

import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class DeferredTasks:
    """Runs non-critical work (notifications, session touch-ups, token cleanup) in the background.

    Failures are logged and never propagate to the request that scheduled the task.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        """Schedule a coroutine to run once, detached from the caller."""
        task = asyncio.create_task(self._run(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        try:
            await coro
        except Exception as e:
            logger.exception("deferred_task_failed", task=name, error=str(e))
        else:
            logger.debug("deferred_task_done", task=name)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait until every scheduled task has finished, including tasks spawned meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
