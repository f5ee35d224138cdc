from .api_server_shutdown_handler import APIServerShutdownHandler
from .playback_shutdown_handler import PlaybackShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "APIServerShutdownHandler",
    "PlaybackShutdownHandler",
    "TaskCancellationHandler",
]
