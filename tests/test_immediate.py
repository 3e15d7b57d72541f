from chainkeeper.diskio.core import Item
from chainkeeper.diskio.immediate import ImmediateUnpacker


def test_dispatch_performs_and_returns_item(tmp_path):
    executor = ImmediateUnpacker()
    item = Item.write_file(tmp_path / "f", b"data", 0o644)
    returned = list(executor.dispatch(item))
    assert returned == [item]
    assert (tmp_path / "f").read_bytes() == b"data"


def test_execute_times_operation(tmp_path):
    executor = ImmediateUnpacker()
    item = Item.make_dir(tmp_path / "d", 0o755)
    returned = list(executor.execute(item))
    assert returned[0] is item
    assert item.start > 0.0
    assert item.finish >= item.start
    assert (tmp_path / "d").is_dir()


def test_join_and_completed_are_empty(tmp_path):
    with ImmediateUnpacker() as executor:
        list(executor.execute(Item.make_dir(tmp_path / "d", 0o755)))
        assert list(executor.completed()) == []
        assert list(executor.join()) == []


def test_failed_item_is_returned_with_error(tmp_path):
    executor = ImmediateUnpacker()
    item = Item.make_dir(tmp_path / "x" / "y", 0o755)
    (returned,) = list(executor.execute(item))
    assert returned is item
    assert isinstance(returned.error, FileNotFoundError)
    assert returned.ok is False
    assert not (tmp_path / "x").exists()