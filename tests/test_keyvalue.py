import threading

import pytest

from kcmkit.keyvalue import MemoryStorage, ReadStorage, Storage


@pytest.fixture
def storage():
    return MemoryStorage()


def test_new_memory_storage_is_empty(storage):
    assert storage.is_empty() is True
    assert storage.list() == []


def test_store_and_get(storage):
    storage.store("foo", b"bar")
    assert storage.get("foo") == b"bar"
    assert "foo" in storage
    assert storage.get("nope") is None
    assert "nope" not in storage


def test_store_overwrites(storage):
    storage.store("foo", b"one")
    storage.store("foo", b"two")
    assert storage.get("foo") == b"two"
    assert len(storage) == 1


def test_none_value_is_distinguishable_by_membership(storage):
    storage.store("empty", None)
    assert "empty" in storage
    assert storage.get("empty") is None


def test_remove(storage):
    assert storage.remove("ghost") is False
    storage.store("foo", b"bar")
    assert storage.remove("foo") is True
    assert "foo" not in storage
    assert storage.remove("foo") is False


def test_clean(storage):
    assert storage.clean() is False
    storage.store("foo", b"bar")
    storage.store("baz", b"qux")
    assert storage.clean() is True
    assert "foo" not in storage
    assert "baz" not in storage
    assert storage.is_empty() is True


def test_list_returns_all_keys(storage):
    storage.store("a", b"1")
    storage.store("b", b"2")
    assert sorted(storage.list()) == ["a", "b"]
    assert sorted(storage) == ["a", "b"]


def test_as_read_storage_reflects_changes(storage):
    read_only = storage.as_read_storage()
    assert read_only.is_empty() is True
    storage.store("foo", b"bar")
    assert read_only.get("foo") == b"bar"
    assert "foo" in read_only
    assert read_only.list() == ["foo"]
    assert read_only.is_empty() is False


def test_read_view_cannot_modify(storage):
    storage.store("keep", b"value")
    read_only = storage.as_read_storage()
    with pytest.raises(AttributeError):
        read_only.store("new", b"value")
    with pytest.raises(AttributeError):
        read_only.remove("keep")
    assert storage.get("new") is None
    assert storage.get("keep") == b"value"
    assert read_only.list() == ["keep"]


def _use_through_interface(store):
    store.store("k", 1)
    found = store.get("k")
    removed = store.remove("k")
    return found, removed, store.is_empty()


def test_memory_storage_fulfils_storage_interface(storage):
    assert isinstance(storage, Storage)
    assert isinstance(storage, ReadStorage)
    assert _use_through_interface(storage) == (1, True, True)


def test_abstract_storage_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Storage()


def test_concurrent_stores(storage):
    def worker(offset):
        for i in range(200):
            storage.store(offset * 1000 + i, i)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(storage) == 800