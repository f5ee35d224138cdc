import json

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from api.dependencies import set_service_container
from api.main import create_app
from engine.animation_engine import AnimationEngine
from engine.export_pipeline import ExportPipeline, GifEncoder
from engine.snapshot_codec import SnapshotCodec
from lifecycle.task_registry import TaskRegistry
from managers.config_manager import ConfigManager
from models.config import EditorConfig
from services.animation_service import AnimationService
from services.event_bus import EventBus
from services.keyboard_shortcuts import KeyboardShortcutHandler
from services.service_container import ServiceContainer


def stroke_snapshot(x: float = 10, y: float = 20, color: str = "#444", **extra) -> str:
    """Drawing save data with one two-point stroke"""
    data = {
        "lines": [{
            "points": [{"x": x, "y": y}, {"x": x + 20, "y": y + 20}],
            "brushColor": color,
            "brushRadius": 2,
        }],
        "width": 200,
        "height": 112,
    }
    data.update(extra)
    return json.dumps(data)


@pytest.fixture(autouse=True)
def fresh_task_registry():
    TaskRegistry._instance = None
    yield
    TaskRegistry._instance = None


@pytest.fixture
def make_snapshot():
    return stroke_snapshot


@pytest.fixture
def engine():
    return AnimationEngine(num_frames=12, fps=12)


@pytest.fixture
def small_codec():
    return SnapshotCodec(width=64, height=36)


@pytest.fixture
def exporter(small_codec):
    return ExportPipeline(small_codec, GifEncoder())


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def recorded_events(event_bus):
    """Every published event, in order"""
    events = []

    def record(event):
        events.append(event)
        return event

    event_bus.add_middleware(record)
    return events


@pytest_asyncio.fixture
async def service(engine, event_bus, exporter):
    svc = AnimationService(engine, event_bus, exporter)
    yield svc
    await svc.stop()


@pytest.fixture
def services(tmp_path):
    """ServiceContainer with a small canvas and exports written under tmp_path"""
    config = EditorConfig()
    bus = EventBus()
    engine = AnimationEngine(
        num_frames=config.frames.default_count,
        fps=config.playback.default_fps,
        max_undo_states=config.undo.max_states,
    )
    exporter = ExportPipeline(SnapshotCodec(width=64, height=36), GifEncoder())
    animation_service = AnimationService(engine, bus, exporter, config=config)

    config_manager = ConfigManager()
    config_manager.editor = config
    container = ServiceContainer(
        animation_service=animation_service,
        event_bus=bus,
        keyboard=KeyboardShortcutHandler(animation_service, bus),
        config_manager=config_manager,
    )
    return container


@pytest.fixture
def client(services, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    set_service_container(services)
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    set_service_container(None)
