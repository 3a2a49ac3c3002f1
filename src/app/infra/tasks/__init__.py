"""Execução de trabalho em background."""

from app.infra.tasks.asyncio_task_handle import AsyncioTaskHandle

__all__ = ["AsyncioTaskHandle"]
