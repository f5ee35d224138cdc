"""
System endpoints - Task introspection and health
"""

from fastapi import APIRouter
from typing import Dict, Any
from datetime import datetime, timezone
from lifecycle.task_registry import TaskRegistry

router = APIRouter(prefix="/system", tags=["System"])


def _status(record) -> str:
    if not record.task.done():
        return "running"
    if record.cancelled:
        return "cancelled"
    if record.finished_with_error:
        return "failed"
    return "completed"


@router.get("/tasks")
async def get_tasks(active_only: bool = False) -> Dict[str, Any]:
    """
    Tracked asyncio tasks (API server, playback loop, ...).

    Useful for debugging hangs or identifying what's blocking shutdown.
    """
    registry = TaskRegistry.instance()
    records = registry.active() if active_only else registry.list_all()

    tasks = [
        {
            "id": r.info.id,
            "category": r.info.category.name,
            "description": r.info.description,
            "created_at": r.info.created_at,
            "status": _status(r),
            "error": str(r.finished_with_error) if r.finished_with_error else None,
        }
        for r in records
    ]
    return {"count": len(tasks), "summary": registry.summary(), "tasks": tasks}


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Healthy unless a background task has failed"""
    registry = TaskRegistry.instance()
    failed = registry.failed()

    return {
        "status": "degraded" if failed else "healthy",
        "reason": f"{len(failed)} background task(s) have failed" if failed else None,
        "tasks": {
            "total": len(registry.list_all()),
            "active": len(registry.active()),
            "failed": len(failed),
            "cancelled": len(registry.cancelled()),
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
