"""
Tests for the HTTP photo store client.
"""
import pytest
import requests

from reactivities import photo_store
from reactivities.photo_store import HttpPhotoStore, LocalPhotoStore, get_photo_store


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


class TestHttpPhotoStore:

    def test_delete_success(self, monkeypatch):
        calls = []

        def fake_delete(url, headers, timeout):
            calls.append((url, headers, timeout))
            return FakeResponse(204)

        monkeypatch.setattr(photo_store.requests, "delete", fake_delete)
        store = HttpPhotoStore("https://assets.example.com/photos/", api_key="secret", timeout=3)

        result = store.delete_photo("abc")

        assert result.ok
        assert calls == [(
            "https://assets.example.com/photos/abc",
            {"Accept": "application/json", "Authorization": "Bearer secret"},
            3,
        )]

    def test_already_deleted_counts_as_success(self, monkeypatch):
        monkeypatch.setattr(photo_store.requests, "delete", lambda *a, **kw: FakeResponse(404))
        assert HttpPhotoStore("https://assets.example.com").delete_photo("abc").ok

    def test_server_error_fails(self, monkeypatch):
        monkeypatch.setattr(photo_store.requests, "delete", lambda *a, **kw: FakeResponse(500, "boom"))
        result = HttpPhotoStore("https://assets.example.com").delete_photo("abc")
        assert not result.ok
        assert "500" in result.error

    def test_connection_error_fails(self, monkeypatch):
        def refuse(*args, **kwargs):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(photo_store.requests, "delete", refuse)
        result = HttpPhotoStore("https://assets.example.com").delete_photo("abc")
        assert not result.ok
        assert "Cannot connect" in result.error


def test_local_store_when_unconfigured():
    store = get_photo_store()
    assert isinstance(store, LocalPhotoStore)
    assert store.delete_photo("anything").ok


def test_store_must_implement_delete():
    class IncompleteStore(photo_store.PhotoStore):
        pass

    with pytest.raises(TypeError):
        IncompleteStore()
