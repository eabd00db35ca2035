"""Tests for the local state store."""

import pytest

from file_provider.errors import StateStoreError
from file_provider.models import FileState
from file_provider.state import StateStore


@pytest.fixture
def state_file(temp_dir):
    return temp_dir / "nested" / "state.pkl"


def test_empty_store(state_file):
    store = StateStore(state_file)

    assert store.get("cfg") is None
    assert store.items() == []
    assert not state_file.exists()


def test_put_persists_across_instances(state_file):
    state = FileState(path="/tmp/a.txt", force=False, content="hi")
    StateStore(state_file).put("cfg", "/tmp/a.txt", state)

    reloaded = StateStore(state_file)

    assert reloaded.get("cfg") == ("/tmp/a.txt", state)
    assert reloaded.items() == [("cfg", "/tmp/a.txt", state)]
    assert not state_file.with_suffix(".tmp").exists()


def test_put_with_new_id_drops_old_record(state_file):
    store = StateStore(state_file)
    store.put("cfg", "/tmp/a.txt", FileState(path="/tmp/a.txt", force=False, content="a"))
    store.put("cfg", "/tmp/b.txt", FileState(path="/tmp/b.txt", force=False, content="b"))

    assert store.get("cfg")[0] == "/tmp/b.txt"
    assert list(store._resources) == ["/tmp/b.txt"]


def test_remove(state_file):
    store = StateStore(state_file)
    store.put("cfg", "/tmp/a.txt", FileState(path="/tmp/a.txt", force=False, content="a"))

    store.remove("cfg")
    store.remove("cfg")

    assert StateStore(state_file).get("cfg") is None


def test_corrupt_state_file_raises(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_bytes(b"this is not a pickle")

    with pytest.raises(StateStoreError):
        StateStore(state_file)


def test_shared_id_survives_removal_of_one_name(state_file):
    """Two names recorded on one path keep the record until both are gone."""
    store = StateStore(state_file)
    state = FileState(path="/tmp/a.txt", force=True, content="a")
    store.put("one", "/tmp/a.txt", state)
    store.put("two", "/tmp/a.txt", state)

    store.remove("one")

    assert store.get("two") == ("/tmp/a.txt", state)
    assert StateStore(state_file).items() == [("two", "/tmp/a.txt", state)]

    store.remove("two")

    assert store._resources == {}


def test_moving_one_name_keeps_shared_record(state_file):
    store = StateStore(state_file)
    shared = FileState(path="/tmp/a.txt", force=True, content="a")
    store.put("one", "/tmp/a.txt", shared)
    store.put("two", "/tmp/a.txt", shared)

    store.put("one", "/tmp/b.txt", FileState(path="/tmp/b.txt", force=False, content="b"))

    assert store.get("two") == ("/tmp/a.txt", shared)
