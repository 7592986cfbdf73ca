"""
Store identifier sources.

The identifier names the spreadsheet-backed dataset every slot operation runs
against. Where it comes from is decided once, when the application is
composed: a configured constant, a value fetched from an internal API, or a
string the owner types in at runtime. All three share the same get/set
interface so nothing downstream cares which one is in use.
"""

import json
import logging
from http.client import HTTPException
from typing import Any
from urllib import error, request

from slot_admin.core.config import Settings
from slot_admin.services.slot_store_client import SlotStoreError, StoreIdentifierMissingError

logger = logging.getLogger(__name__)

_FETCHED_ID_KEYS = ("spreadsheetId", "spreadsheet_id", "storeId", "store_id")


class StoreIdentifier:
    source = "owner"

    def __init__(self, initial_value: str = "") -> None:
        self._value = _normalize_store_id(initial_value)

    @property
    def store_id(self) -> str:
        return self._value

    @store_id.setter
    def store_id(self, value: str) -> None:
        self._value = _normalize_store_id(value)

    @property
    def is_configured(self) -> bool:
        return bool(self._value)

    @property
    def is_editable(self) -> bool:
        return self.source == "owner"

    def require(self) -> str:
        if not self._value:
            raise StoreIdentifierMissingError("Store identifier is not configured.")
        return self._value

    def refresh(self) -> str:
        return self._value


class ConstantStoreIdentifier(StoreIdentifier):
    source = "constant"


class OwnerStoreIdentifier(StoreIdentifier):
    source = "owner"


class FetchedStoreIdentifier(StoreIdentifier):
    source = "fetched"

    def __init__(self, *, source_url: str, timeout_seconds: float = 10.0) -> None:
        super().__init__("")
        self.source_url = source_url
        self.timeout_seconds = timeout_seconds

    def refresh(self) -> str:
        logger.info("Fetching store identifier from %s", self.source_url)
        req = request.Request(
            self.source_url,
            method="GET",
            headers={"Accept": "application/json"},
        )
        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                response_body = response.read()
        except TimeoutError as exc:
            raise SlotStoreError("Error fetching store identifier: request timed out.") from exc
        except error.HTTPError as exc:
            raise SlotStoreError(f"Error fetching store identifier: HTTP {exc.code}") from exc
        except error.URLError as exc:
            raise SlotStoreError(f"Error fetching store identifier: {exc.reason}") from exc
        except (OSError, HTTPException) as exc:
            raise SlotStoreError(
                f"Error fetching store identifier: connection error ({exc.__class__.__name__}).",
            ) from exc

        try:
            parsed_body = json.loads(response_body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SlotStoreError("Error fetching store identifier: invalid JSON.") from exc

        store_id = _extract_store_id(parsed_body)
        if not store_id:
            raise SlotStoreError("Error fetching store identifier: response has no identifier.")
        self.store_id = store_id
        return self.store_id


def create_store_identifier(settings: Settings) -> StoreIdentifier:
    if settings.store_id_source == "fetched":
        return FetchedStoreIdentifier(
            source_url=settings.store_id_source_url,
            timeout_seconds=settings.slot_store_timeout_seconds,
        )
    if settings.store_id_source == "owner":
        return OwnerStoreIdentifier(settings.store_id)
    return ConstantStoreIdentifier(settings.store_id)


def _extract_store_id(payload: Any) -> str:
    if isinstance(payload, str):
        return _normalize_store_id(payload)
    if not isinstance(payload, dict):
        return ""
    for key in _FETCHED_ID_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return _normalize_store_id(value)
    return ""


def _normalize_store_id(value: str | None) -> str:
    if not value:
        return ""
    return value.strip()
