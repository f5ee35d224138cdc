"""
Lifecycle subsystem
-------------------

- graceful shutdown
- task tracking & introspection
- shutdown handlers

    from lifecycle import ShutdownCoordinator, TaskRegistry
    from lifecycle.handlers import PlaybackShutdownHandler
"""

from .shutdown_coordinator import ShutdownCoordinator
from .task_registry import TaskRegistry, TaskCategory, TaskInfo, create_tracked_task
from .shutdown_protocol import IShutdownHandler
from .api_server_wrapper import APIServerWrapper
from . import handlers

__all__ = [
    "ShutdownCoordinator",
    "TaskRegistry",
    "TaskCategory",
    "TaskInfo",
    "create_tracked_task",
    "IShutdownHandler",
    "APIServerWrapper",
    "handlers",
]
