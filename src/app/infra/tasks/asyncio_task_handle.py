"""TaskHandle baseado em asyncio para continuations de interações."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from app.observability import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 100


class AsyncioTaskHandle:
    """Mantém continuations vivas após o ACK.

    Guarda referência forte de cada task até o término, limita a
    concorrência com semáforo e registra falhas no done-callback.
    """

    def __init__(self, max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> None:
        if max_concurrency <= 0:
            raise ValueError("max_concurrency deve ser > 0")
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._active_tasks: set[asyncio.Task[Any]] = set()

    @property
    def active_count(self) -> int:
        return len(self._active_tasks)

    def extend(self, awaitable: Awaitable[None], *, name: str | None = None) -> None:
        """Agenda a awaitable com limite de concorrência."""
        task = asyncio.create_task(self._run_with_limit(awaitable), name=name)
        self._active_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        logger.info(
            "continuation_scheduled",
            extra={
                "task_name": name,
                "correlation_id": get_correlation_id(),
                "active_tasks": len(self._active_tasks),
            },
        )

    async def _run_with_limit(self, awaitable: Awaitable[None]) -> None:
        async with self._semaphore:
            await awaitable

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._active_tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "continuation_task_failed",
                    extra={
                        "task_name": task.get_name(),
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active_tasks),
                    },
                )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks pendentes durante shutdown do processo."""
        if not self._active_tasks:
            return

        pending_now = list(self._active_tasks)
        logger.info(
            "continuation_shutdown_wait",
            extra={
                "pending_tasks": len(pending_now),
                "timeout_seconds": timeout_seconds,
            },
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "continuation_shutdown_cancelled",
            extra={"cancelled_tasks": len(pending)},
        )
