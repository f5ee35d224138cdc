"""
API tests: session, frames, playback and export endpoints over TestClient.
"""

import io

from PIL import Image

API = "/api/v1"


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_session(client):
    body = client.get(f"{API}/session").json()

    assert body["num_frames"] == 12
    assert body["active_frame"] == 0
    assert body["status"] == "STOPPED"
    assert body["fps"] == 12
    assert body["is_empty"] is True
    assert body["can_undo"] is False


class TestFrames:

    def test_list(self, client):
        body = client.get(f"{API}/frames").json()

        assert body["count"] == 12
        assert body["frames"][0]["is_active"] is True
        assert all(frame["is_blank"] for frame in body["frames"])

    def test_put_and_get(self, client, make_snapshot):
        response = client.put(f"{API}/frames/3", json={"snapshot": make_snapshot()})
        assert response.status_code == 200

        frame = client.get(f"{API}/frames/3").json()
        assert frame["snapshot"] == make_snapshot()
        assert frame["is_blank"] is False

    def test_bulk_load(self, client, make_snapshot):
        frames = [make_snapshot(x=i) for i in range(13)]
        body = client.post(f"{API}/frames/load", json={"frames": frames}).json()

        assert body["loaded"] == 12
        assert body["ignored"] == 1
        assert body["session"]["is_empty"] is False

    def test_navigation(self, client):
        assert client.post(f"{API}/frames/prev").json()["active_frame"] == 11
        assert client.post(f"{API}/frames/next").json()["active_frame"] == 0
        assert client.post(f"{API}/frames/active", json={"index": 6}).json()["active_frame"] == 6

    def test_drawing_and_undo(self, client, make_snapshot):
        client.post(f"{API}/frames/drawing", json={"snapshot": make_snapshot(x=1)})
        session = client.post(f"{API}/frames/drawing", json={"snapshot": make_snapshot(x=2)}).json()
        assert session["can_undo"] is True

        body = client.post(f"{API}/frames/undo").json()
        assert body["applied"] is True
        assert client.get(f"{API}/frames/0").json()["snapshot"] == make_snapshot(x=1)

    def test_undo_without_history(self, client):
        body = client.post(f"{API}/frames/undo").json()
        assert body["applied"] is False

    def test_keyframe_and_overlays(self, client, make_snapshot):
        client.put(f"{API}/frames/3", json={"snapshot": make_snapshot(x=3)})
        client.put(f"{API}/frames/5", json={"snapshot": make_snapshot(x=5)})

        toggled = client.post(f"{API}/frames/5/keyframe").json()
        assert toggled == {"index": 5, "is_keyframe": True, "keyframes": [5]}

        client.post(f"{API}/frames/active", json={"index": 4})
        overlays = client.get(f"{API}/frames/overlays").json()["overlays"]

        assert [(o["index"], o["kind"], o["opacity"]) for o in overlays] == [
            (3, "NEARBY", 0.33),
            (5, "KEYFRAME", 0.5),
        ]

    def test_frame_count(self, client):
        client.post(f"{API}/frames/active", json={"index": 9})

        pending = client.put(f"{API}/frames/count", json={"count": 5}).json()
        assert pending["pending_frame_count"] == 5
        assert pending["num_frames"] == 12

        applied = client.post(f"{API}/frames/count/apply").json()
        assert applied["num_frames"] == 5
        assert applied["active_frame"] == 4

    def test_frame_count_clamped_to_max(self, client):
        body = client.put(f"{API}/frames/count", json={"count": 1000}).json()
        assert body["pending_frame_count"] == 120

    def test_frame_image(self, client, make_snapshot):
        client.put(f"{API}/frames/0", json={"snapshot": make_snapshot()})
        response = client.get(f"{API}/frames/0/image")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        with Image.open(io.BytesIO(response.content)) as image:
            assert image.size == (64, 36)


class TestPlayback:

    def test_play_pause(self, client):
        playing = client.post(f"{API}/playback/play").json()
        assert playing["status"] == "PLAYING"

        paused = client.post(f"{API}/playback/pause").json()
        assert paused["status"] == "STOPPED"

    def test_toggle(self, client):
        assert client.post(f"{API}/playback/toggle").json()["is_playing"] is True
        assert client.post(f"{API}/playback/toggle").json()["is_playing"] is False

    def test_fps(self, client):
        assert client.put(f"{API}/playback/fps", json={"fps": 24}).json()["fps"] == 24


class TestKeyboard:

    def test_ctrl_z(self, client, make_snapshot):
        client.post(f"{API}/frames/drawing", json={"snapshot": make_snapshot()})

        body = client.post(f"{API}/keyboard", json={"key": "z", "modifiers": ["ctrl"]}).json()

        assert body["accepted"] is True
        assert body["session"]["is_empty"] is True

    def test_ignored_while_playing(self, client, make_snapshot):
        client.post(f"{API}/frames/drawing", json={"snapshot": make_snapshot()})
        client.post(f"{API}/playback/play")

        body = client.post(f"{API}/keyboard", json={"key": "z", "modifiers": ["meta"]}).json()
        client.post(f"{API}/playback/pause")

        assert body["accepted"] is False
        assert body["session"]["is_empty"] is False


class TestExport:

    def test_gif_download(self, client, make_snapshot):
        client.post(f"{API}/frames/load", json={"frames": [make_snapshot(x=1), "", make_snapshot(x=60)]})

        response = client.post(f"{API}/export")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/gif"
        assert 'filename="animation.gif"' in response.headers["content-disposition"]
        assert response.headers["x-frame-count"] == "2"
        assert response.content.startswith(b"GIF8")

    def test_export_file(self, client, tmp_path, make_snapshot):
        client.put(f"{API}/frames/0", json={"snapshot": make_snapshot()})

        body = client.post(f"{API}/export/file").json()

        assert body["path"].endswith("animation.gif")
        assert body["size_bytes"] > 0
        assert (tmp_path / "exports" / "animation.gif").exists()
