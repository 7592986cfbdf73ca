import io
import json
from http.client import RemoteDisconnected
from urllib import error

import pytest

from slot_admin.core.config import Settings
from slot_admin.services.slot_store_client import SlotStoreError, StoreIdentifierMissingError
from slot_admin.services.store_identifier import (
    ConstantStoreIdentifier,
    FetchedStoreIdentifier,
    OwnerStoreIdentifier,
    create_store_identifier,
)


class _MockResponse:
    def __init__(self, payload: object) -> None:
        self._payload = json.dumps(payload).encode("utf-8")

    def __enter__(self) -> "_MockResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:  # type: ignore[no-untyped-def]
        return False

    def read(self) -> bytes:
        return self._payload


def test_create_store_identifier_follows_configured_source() -> None:
    constant = create_store_identifier(Settings(store_id_source="constant", store_id=" sheet-1 "))
    owner = create_store_identifier(Settings(store_id_source="owner"))
    fetched = create_store_identifier(
        Settings(store_id_source="fetched", store_id_source_url="http://internal/api/id"),
    )

    assert isinstance(constant, ConstantStoreIdentifier)
    assert constant.store_id == "sheet-1"
    assert constant.is_editable is False
    assert isinstance(owner, OwnerStoreIdentifier)
    assert owner.is_configured is False
    assert owner.is_editable is True
    assert isinstance(fetched, FetchedStoreIdentifier)
    assert fetched.source_url == "http://internal/api/id"


def test_owner_store_identifier_normalizes_and_clears() -> None:
    store_identifier = OwnerStoreIdentifier()
    with pytest.raises(StoreIdentifierMissingError):
        store_identifier.require()

    store_identifier.store_id = "  abc123  "
    assert store_identifier.require() == "abc123"

    store_identifier.store_id = "   "
    assert store_identifier.is_configured is False


@pytest.mark.parametrize(
    "payload",
    [
        {"spreadsheetId": "sheet-42"},
        {"storeId": "sheet-42"},
        {"store_id": " sheet-42 "},
        "sheet-42",
    ],
)
def test_fetched_store_identifier_reads_known_keys(
    monkeypatch: pytest.MonkeyPatch,
    payload: object,
) -> None:
    def fake_urlopen(req, timeout=10):  # type: ignore[no-untyped-def]
        assert req.full_url == "http://internal/api/id"
        return _MockResponse(payload)

    monkeypatch.setattr("slot_admin.services.store_identifier.request.urlopen", fake_urlopen)

    store_identifier = FetchedStoreIdentifier(source_url="http://internal/api/id")
    assert store_identifier.is_configured is False

    assert store_identifier.refresh() == "sheet-42"
    assert store_identifier.store_id == "sheet-42"


def test_fetched_store_identifier_surfaces_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_urlopen(req, timeout=10):  # type: ignore[no-untyped-def]
        raise error.HTTPError(
            url=req.full_url,
            code=503,
            msg="unavailable",
            hdrs=None,
            fp=io.BytesIO(b""),
        )

    monkeypatch.setattr("slot_admin.services.store_identifier.request.urlopen", failing_urlopen)

    store_identifier = FetchedStoreIdentifier(source_url="http://internal/api/id")
    with pytest.raises(SlotStoreError, match="Error fetching store identifier: HTTP 503"):
        store_identifier.refresh()
    assert store_identifier.is_configured is False


def test_fetched_store_identifier_requires_identifier_in_response(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fake_urlopen(req, timeout=10):  # type: ignore[no-untyped-def]
        return _MockResponse({"spreadsheetId": ""})

    monkeypatch.setattr("slot_admin.services.store_identifier.request.urlopen", fake_urlopen)

    with pytest.raises(SlotStoreError, match="response has no identifier"):
        FetchedStoreIdentifier(source_url="http://internal/api/id").refresh()


@pytest.mark.parametrize(
    ("failure", "name"),
    [
        (RemoteDisconnected("Remote end closed connection without response"), "RemoteDisconnected"),
        (ConnectionResetError(104, "Connection reset by peer"), "ConnectionResetError"),
    ],
)
def test_fetched_store_identifier_converts_dropped_connections(
    monkeypatch: pytest.MonkeyPatch,
    failure: Exception,
    name: str,
) -> None:
    def failing_urlopen(req, timeout=10):  # type: ignore[no-untyped-def]
        raise failure

    monkeypatch.setattr("slot_admin.services.store_identifier.request.urlopen", failing_urlopen)

    store_identifier = FetchedStoreIdentifier(source_url="http://internal/api/id")
    with pytest.raises(
        SlotStoreError,
        match=rf"Error fetching store identifier: connection error \({name}\)\.",
    ):
        store_identifier.refresh()
    assert store_identifier.is_configured is False
