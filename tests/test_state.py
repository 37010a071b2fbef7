import pytest
from flask import Flask, session

from pagemarker.errors import StoreUnavailable
from pagemarker.state import SessionStore


def test_set_get_delete_on_plain_mapping():
    backing = {}
    store = SessionStore(backing, namespace="PageMarker")
    store.set("items", {"sort": "asc", "tag": ("a", "b")})
    assert backing["PageMarker.items"] == [["sort", "asc"], ["tag", ["a", "b"]]]
    assert store.get("items") == {"sort": "asc", "tag": ["a", "b"]}
    assert list(store.get("items")) == ["sort", "tag"]

    store.delete("items")
    assert store.get("items") is None
    # deleting twice is fine
    store.delete("items")


def test_empty_entry_reads_back_empty():
    store = SessionStore({}, namespace="NS")
    store.set("p", {})
    assert store.get("p") == {}
    assert store.key("p") == "NS.p"


def test_namespace_from_env(monkeypatch):
    monkeypatch.setenv("PAGEMARKER_NAMESPACE", "Custom")
    assert SessionStore({}).key("items") == "Custom.items"


def test_flask_session_requires_request_context():
    store = SessionStore()
    with pytest.raises(StoreUnavailable):
        store.get("items")
    with pytest.raises(StoreUnavailable):
        store.set("items", {"a": "1"})


def test_flask_session_backend():
    app = Flask(__name__)
    app.secret_key = "test"
    with app.test_request_context("/items"):
        store = SessionStore(namespace="PageMarker")
        store.set("items", {"page": "2"})
        assert session["PageMarker.items"] == [["page", "2"]]
        assert store.get("items") == {"page": "2"}


class _Broken(dict):
    def __setitem__(self, key, value):
        raise OSError("backend down")


def test_backend_errors_become_store_unavailable():
    store = SessionStore(_Broken())
    with pytest.raises(StoreUnavailable) as info:
        store.set("items", {"a": "1"})
    assert isinstance(info.value.__cause__, OSError)


def test_malformed_entry_is_store_unavailable():
    store = SessionStore({"PageMarker.items": "garbage"}, namespace="PageMarker")
    with pytest.raises(StoreUnavailable):
        store.get("items")
