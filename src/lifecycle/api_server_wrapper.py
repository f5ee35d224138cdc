from __future__ import annotations
import asyncio
import uvicorn
from fastapi import FastAPI
from typing import Optional
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    Runs uvicorn inside an asyncio task, without uvicorn's own signal handlers.

    - start() launches server.serve() in the background and blocks until
      stop() is called. Schedule it with create_tracked_task().
    - stop() unblocks start(), asks uvicorn to shut down, then cancels the
      serve task if it is still alive.
    """

    def __init__(self, app: FastAPI, host: str = "0.0.0.0", port: int = 8000):
        self.app = app
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stop_event: asyncio.Event = asyncio.Event()

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level="warning",
            access_log=False,
            server_header=False,
        )
        server = uvicorn.Server(config)

        # Shutdown is driven by ShutdownCoordinator
        server.install_signal_handlers = lambda: None  # type: ignore

        return server

    async def start(self, *, wait_started_timeout: float = 5.0) -> None:
        """Start uvicorn and wait until stop() is called"""
        if self.is_running:
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._stop_event.clear()

        log.info(f"Launching API server on http://{self.host}:{self.port}")
        self._serve_task = asyncio.create_task(self._server.serve(), name="UvicornServe")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + wait_started_timeout
        while loop.time() < deadline and not self._serve_task.done():
            if getattr(self._server, "started", False):
                log.info("API server started")
                break
            await asyncio.sleep(0.05)

        try:
            await self._stop_event.wait()
        except asyncio.CancelledError:
            log.debug("start() cancelled, stopping server")
            await self.stop()
            raise

    async def stop(self, *, shutdown_timeout: float = 2.0) -> None:
        """Stop the server and release the port"""
        self._stop_event.set()

        server, task = self._server, self._serve_task
        if server is None or task is None:
            log.debug("API server stop() called but server was not running")
            return

        log.info("Stopping API server...")
        server.should_exit = True
        server.force_exit = True

        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=shutdown_timeout)
        except asyncio.TimeoutError:
            log.warn("API server did not exit in time, cancelling serve task")
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        self._server = None
        self._serve_task = None
        log.info("API server stopped")

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._serve_task
