import pytest

from core.entities import PostKind
from services.studio import StudioBuffer


def test_push_is_most_recent_first(make_post):
    buffer = StudioBuffer(capacity=50)
    for n in range(3):
        buffer.push(make_post(n))

    assert [p["id"] for p in buffer.snapshot()] == [2, 1, 0]


def test_capacity_evicts_oldest(make_post):
    buffer = StudioBuffer(capacity=50)
    for n in range(51):
        buffer.push(make_post(n))

    ids = [p["id"] for p in buffer.snapshot()]

    assert len(buffer) == 50
    assert len(ids) == 50
    assert 0 not in ids
    assert ids == list(range(50, 0, -1))


def test_snapshot_is_detached_from_buffer(make_post):
    buffer = StudioBuffer()
    buffer.push(make_post(1, caption="Hello"))
    buffer.push(make_post(2, caption="World"))

    snap = buffer.snapshot()
    snap[0]["title"] = "tampered"
    snap[0]["tags"].append("x")
    snap.clear()

    again = buffer.snapshot()
    assert [p["id"] for p in again] == [2, 1]
    assert again[0]["title"] == "World"
    assert again[0]["tags"] == []


def test_snapshot_resolves_media(make_post):
    buffer = StudioBuffer()
    buffer.push(make_post(1))
    buffer.push(make_post(2, kind=PostKind.PHOTO, file_id="AgAD123"))

    photo, text = buffer.snapshot()

    assert photo["type"] == "photo"
    assert photo["mediaUrl"] == "/tg/file/AgAD123"
    assert photo["source"] == "Azad Studio"
    assert text["type"] == "text"
    assert text["mediaUrl"] is None


def test_small_capacity(make_post):
    buffer = StudioBuffer(capacity=1)
    buffer.push(make_post(1))
    buffer.push(make_post(2))
    assert [p["id"] for p in buffer.snapshot()] == [2]


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        StudioBuffer(capacity=0)


def test_new_buffers_are_independent(make_post):
    first, second = StudioBuffer(), StudioBuffer()
    first.push(make_post(1))
    assert second.snapshot() == []
