import asyncio

import pytest
from fastapi import FastAPI

from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import APIServerShutdownHandler


@pytest.fixture
def api_wrapper():
    return APIServerWrapper(FastAPI(), host="127.0.0.1", port=0)


@pytest.mark.asyncio
async def test_start_and_stop(api_wrapper):
    task = asyncio.create_task(api_wrapper.start())
    await asyncio.sleep(0.2)

    assert api_wrapper.is_running

    await api_wrapper.stop()
    await asyncio.wait_for(task, timeout=2.0)

    assert not api_wrapper.is_running
    assert api_wrapper.task is None


@pytest.mark.asyncio
async def test_stop_without_start(api_wrapper):
    # Should not crash
    await api_wrapper.stop()


@pytest.mark.asyncio
async def test_start_cancelled_externally(api_wrapper):
    task = asyncio.create_task(api_wrapper.start())
    await asyncio.sleep(0.1)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert not api_wrapper.is_running


@pytest.mark.asyncio
async def test_shutdown_handler_stops_server(api_wrapper):
    task = asyncio.create_task(api_wrapper.start())
    await asyncio.sleep(0.2)

    await APIServerShutdownHandler(api_wrapper).shutdown()
    await asyncio.wait_for(task, timeout=2.0)

    assert not api_wrapper.is_running
