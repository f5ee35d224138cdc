"""
Task Registry
-------------

Tracks every long-lived asyncio task the editor starts (API server,
playback loop) so shutdown can cancel them and /system/tasks can list them.

    task = create_tracked_task(loop_coro(), category=TaskCategory.PLAYBACK,
                               description="Playback loop @ 12 fps")
"""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Any, Deque, Dict, List, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)

# Finished records kept for /system/tasks; older ones are dropped
MAX_FINISHED_RECORDS = 100


class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    API = auto()
    PLAYBACK = auto()
    GENERAL = auto()


@dataclass(frozen=True)
class TaskInfo:
    """Metadata captured when the task is registered"""
    id: int
    category: TaskCategory
    description: str
    created_at: str            # ISO UTC
    created_timestamp: float   # epoch seconds


@dataclass
class TaskRecord:
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_return: Optional[Any] = None
    finished_at: Optional[str] = None


class TaskRegistry:
    """
    Process-wide registry of tracked tasks (singleton via instance()).

    Completion is recorded by a done-callback, which moves the record from
    the running table into a bounded history.
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self, max_finished: int = MAX_FINISHED_RECORDS) -> None:
        self._running: Dict[asyncio.Task, TaskRecord] = {}
        self._finished: Deque[TaskRecord] = deque(maxlen=max_finished)
        self._next_id = 1

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        task_id = self._next_id
        self._next_id += 1

        now = datetime.now(timezone.utc)
        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=now.isoformat(),
            created_timestamp=now.timestamp(),
        )
        self._running[task] = TaskRecord(task=task, info=info)
        task.add_done_callback(self._on_task_done)

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")
        return task_id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self._running.pop(task, None)
        if record is None:
            return
        self._finished.append(record)

        record.finished_at = datetime.now(timezone.utc).isoformat()
        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc is not None:
            record.finished_with_error = exc
            log.error(
                f"[Task {record.info.id}] FAILED: {exc}",
                error=type(exc).__name__,
                description=record.info.description,
            )
        else:
            record.finished_return = task.result()
            log.debug(f"[Task {record.info.id}] Completed")

    # === Introspection ===

    def list_all(self) -> List[TaskRecord]:
        """Running tasks, then the retained finished ones (oldest first)"""
        return list(self._running.values()) + list(self._finished)

    def active(self) -> List[TaskRecord]:
        return [r for r in self._running.values() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._finished if r.finished_with_error is not None]

    def cancelled(self) -> List[TaskRecord]:
        return [r for r in self._finished if r.cancelled]

    def summary(self) -> str:
        return (
            f"Tasks: total={len(self._running) + len(self._finished)}, running={len(self.active())}, "
            f"failed={len(self.failed())}, cancelled={len(self.cancelled())}"
        )

    def get_tasks_for_shutdown(self, exclude: Optional[List[asyncio.Task]] = None) -> List[asyncio.Task]:
        """Unfinished tasks, minus `exclude`"""
        exclude = exclude or []
        tasks = [t for t in self._running if not t.done() and t not in exclude]
        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> asyncio.Task:
    """Create a task on the running loop and register it"""
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(coro)
    TaskRegistry.instance().register(task, category, description)
    return task
