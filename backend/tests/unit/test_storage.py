"""Unit tests: client storage backends."""
import pytest

from client.storage import FileStorage, MemoryStorage

pytestmark = pytest.mark.unit


def test_memory_storage_contract():
    """set/get/remove behave like localStorage; values are strings."""
    storage = MemoryStorage()
    assert storage.get_item("token") is None
    storage.set_item("token", "abc")
    storage.set_item("count", 3)
    assert storage.get_item("token") == "abc"
    assert storage.get_item("count") == "3"
    storage.remove_item("token")
    storage.remove_item("token")
    assert storage.get_item("token") is None


def test_file_storage_persists(tmp_path):
    """FileStorage survives re-opening the same file."""
    path = tmp_path / "session.json"
    FileStorage(path).set_item("token", "abc")
    assert FileStorage(path).get_item("token") == "abc"


def test_file_storage_corrupt_file_is_empty(tmp_path):
    """An unreadable file starts empty instead of raising."""
    path = tmp_path / "session.json"
    path.write_text("{broken", encoding="utf-8")
    storage = FileStorage(path)
    assert storage.get_item("token") is None
    storage.set_item("token", "fresh")
    assert FileStorage(path).get_item("token") == "fresh"


def test_file_storage_clear(tmp_path):
    """clear removes everything from disk too."""
    path = tmp_path / "session.json"
    storage = FileStorage(path)
    storage.set_item("a", "1")
    storage.clear()
    assert FileStorage(path).get_item("a") is None
