"""
main_asyncio.py - Application entry point for FlipFrame
-------------------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring dependencies (Dependency Injection)
- starting the API server
- graceful shutdown on Ctrl+C or SIGTERM
"""

import sys

# Set UTF-8 encoding for output BEFORE any imports (fixes Unicode symbol rendering)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio

from api.dependencies import set_service_container
from api.main import create_app
from lifecycle import ShutdownCoordinator
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import APIServerShutdownHandler, PlaybackShutdownHandler, TaskCancellationHandler
from lifecycle.task_registry import create_tracked_task, TaskCategory
from managers import ConfigManager
from models.enums import LogCategory
from services import AnimationService, EventBus, KeyboardShortcutHandler, ServiceContainer
from services.middleware import log_middleware
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)


async def main():
    """Main async entry point (dependency injection and event loop startup)."""

    log.info("Starting FlipFrame...")

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = ConfigManager()
    config_manager.load()
    config = config_manager.editor
    configure_logger(config_manager.log_level, use_colors=config.logging.use_colors)

    # ========================================================================
    # 2. SERVICES
    # ========================================================================

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    animation_service = AnimationService.from_config(config, event_bus)
    keyboard = KeyboardShortcutHandler(animation_service, event_bus)

    services = ServiceContainer(
        animation_service=animation_service,
        event_bus=event_bus,
        keyboard=keyboard,
        config_manager=config_manager,
    )
    set_service_container(services)

    state = animation_service.get_state()
    log.info(
        "Editor session ready",
        frames=state.num_frames,
        fps=state.fps,
        undo_depth=config.undo.max_states,
    )

    # ========================================================================
    # 3. API SERVER
    # ========================================================================

    app = create_app(cors_origins=config.api.cors_origins)
    api_wrapper = APIServerWrapper(app, host=config.api.host, port=config.api.port)
    api_task = create_tracked_task(
        api_wrapper.start(),
        category=TaskCategory.API,
        description=f"API server on {config.api.host}:{config.api.port}"
    )

    # ========================================================================
    # 4. SHUTDOWN
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(PlaybackShutdownHandler(animation_service))
    coordinator.register(APIServerShutdownHandler(api_wrapper))
    coordinator.register(TaskCancellationHandler(exclude=[api_task]))

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    log.info("🏁 Application initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    set_service_container(None)
    log.info("👋 FlipFrame shut down cleanly.")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    run()
