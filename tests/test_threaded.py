import time

import pytest

from chainkeeper.diskio.core import Item
from chainkeeper.diskio.threaded import Threaded, TrackerEvent


def _run_all(executor, items):
    returned = []
    for item in items:
        returned.extend(executor.execute(item))
    returned.extend(executor.join())
    return returned


def test_every_item_is_returned_once(tmp_path):
    items = [
        Item.write_file(tmp_path / f"file{n}", f"body {n}".encode(), 0o644)
        for n in range(20)
    ]
    with Threaded(thread_count=2) as executor:
        returned = _run_all(executor, items)
    assert sorted(i.full_path for i in returned) == sorted(i.full_path for i in items)
    assert all(i.error is None for i in returned)
    for item in items:
        assert item.full_path.read_bytes() == item.content


def test_join_with_nothing_pending_reports_progress_frame():
    events = []
    with Threaded(lambda e, v: events.append((e, v)), thread_count=1) as executor:
        assert list(executor.join()) == []
    assert events[:5] == [
        (TrackerEvent.DOWNLOAD_FINISHED, None),
        (TrackerEvent.DOWNLOAD_PUSH_UNITS, "iops"),
        (TrackerEvent.DOWNLOAD_CONTENT_LENGTH_RECEIVED, 0),
        (TrackerEvent.DOWNLOAD_FINISHED, None),
        (TrackerEvent.DOWNLOAD_POP_UNITS, None),
    ]


def test_data_received_matches_content_length(tmp_path):
    events = []
    with Threaded(lambda e, v: events.append((e, v)), thread_count=2) as executor:
        for n in range(10):
            list(executor.execute(Item.write_file(tmp_path / f"f{n}", b"x", 0o644)))
        list(executor.join())
        total = next(
            v for e, v in events if e is TrackerEvent.DOWNLOAD_CONTENT_LENGTH_RECEIVED
        )
        received = sum(
            len(v) for e, v in events if e is TrackerEvent.DOWNLOAD_DATA_RECEIVED
        )
    assert received == total
    assert events[-1] == (TrackerEvent.DOWNLOAD_POP_UNITS, None)


def test_failed_operation_keeps_error(tmp_path):
    with Threaded(thread_count=1) as executor:
        returned = _run_all(executor, [Item.make_dir(tmp_path / "a" / "b", 0o755)])
    assert len(returned) == 1
    assert isinstance(returned[0].error, FileNotFoundError)


def test_completed_yields_finished_items(tmp_path):
    with Threaded(thread_count=1) as executor:
        item = Item.make_dir(tmp_path / "d", 0o755)
        list(executor.execute(item))
        found = []
        deadline = time.monotonic() + 5
        while not found and time.monotonic() < deadline:
            found.extend(executor.completed())
            time.sleep(0.01)
        assert found == [item]
        assert list(executor.join()) == []
    assert (tmp_path / "d").is_dir()


def test_dispatch_after_close_raises(tmp_path):
    executor = Threaded(thread_count=1)
    executor.close()
    with pytest.raises(RuntimeError):
        list(executor.execute(Item.make_dir(tmp_path / "d", 0o755)))


def test_close_is_idempotent(tmp_path):
    executor = Threaded(thread_count=1)
    list(executor.execute(Item.make_dir(tmp_path / "d", 0o755)))
    executor.close()
    executor.close()
    assert list(executor.join()) == []
    assert (tmp_path / "d").is_dir()


def test_zero_threads_rejected():
    with pytest.raises(ValueError):
        Threaded(thread_count=0)


def test_thread_count_is_kept():
    with Threaded(thread_count=3) as executor:
        assert executor.thread_count == 3