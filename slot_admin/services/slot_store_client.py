from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from http.client import HTTPException
from typing import TYPE_CHECKING, Any
from urllib import error, parse, request

from slot_admin.schemas.slot import Slot

if TYPE_CHECKING:
    from slot_admin.services.store_identifier import StoreIdentifier

logger = logging.getLogger(__name__)

_SLOT_ROW_FIELDS = frozenset(
    {
        "id",
        "date",
        "time",
        "status",
        "client_name",
        "client_email",
        "booking_date",
        "zoom_option",
    },
)


class SlotStoreError(Exception):
    pass


class StoreIdentifierMissingError(SlotStoreError):
    pass


class SlotStoreClient:
    """
    Talks to the tabular-storage backend holding the slot rows.

    ``sheet`` addresses a spreadsheet-as-API service where the store
    identifier is the first path segment. ``internal`` addresses the
    project's own backend, which already knows its spreadsheet.
    """

    def __init__(
        self,
        *,
        api_url: str,
        store_identifier: StoreIdentifier,
        flavor: str = "sheet",
        timeout_seconds: float = 10.0,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.store_identifier = store_identifier
        self.flavor = flavor
        self.timeout_seconds = timeout_seconds

    def list_slots(self) -> list[Slot]:
        payload = self._request_json("GET", self._list_path(), action="fetch slots")
        if not isinstance(payload, list):
            raise SlotStoreError("Slot store response is not a JSON array.")

        slots: list[Slot] = []
        for row in payload:
            slot = _parse_slot_row(row)
            if slot is None:
                logger.warning("Skipping slot row without id: %s", row)
                continue
            slots.append(slot)
        return slots

    def create_slot(self, slot: Slot) -> None:
        record = slot.to_record()
        if self.flavor == "internal":
            body: dict[str, Any] = record
            path = "/add-slot"
        else:
            body = {"data": record}
            path = f"/{self._quoted_store_id()}"
        self._request_json("POST", path, payload=body, action="add slot")

    def delete_slot(self, slot_id: str) -> None:
        quoted_slot_id = parse.quote(slot_id, safe="")
        if self.flavor == "internal":
            path = f"/delete-slot/{quoted_slot_id}"
        else:
            path = f"/{self._quoted_store_id()}/id/{quoted_slot_id}"
        self._request_json("DELETE", path, action="delete slot")

    def _list_path(self) -> str:
        if self.flavor == "internal":
            return "/slots"
        return f"/{self._quoted_store_id()}"

    def _quoted_store_id(self) -> str:
        return parse.quote(self.store_identifier.require(), safe="")

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        action: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        target = f"{self.api_url}{path}"
        raw_payload: bytes | None = None
        headers = {"Accept": "application/json"}
        if payload is not None:
            raw_payload = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = request.Request(target, data=raw_payload, method=method, headers=headers)
        logger.info("Slot store request method=%s url=%s", method, target)
        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                response_body = response.read()
        except TimeoutError as exc:
            raise SlotStoreError(f"Failed to {action}: request timed out.") from exc
        except error.HTTPError as exc:
            raise SlotStoreError(f"Failed to {action} (HTTP {exc.code}).") from exc
        except error.URLError as exc:
            raise SlotStoreError(f"Failed to {action}: {exc.reason}") from exc
        except (OSError, HTTPException) as exc:
            raise SlotStoreError(f"Failed to {action}: connection error ({exc.__class__.__name__}).") from exc

        if method != "GET":
            return None
        try:
            return json.loads(response_body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SlotStoreError(f"Failed to {action}: invalid JSON response.") from exc


def _parse_slot_row(row: Any) -> Slot | None:
    if not isinstance(row, Mapping):
        return None

    values: dict[str, str] = {}
    for raw_key, raw_value in row.items():
        key = _normalize_column_name(str(raw_key))
        if key not in _SLOT_ROW_FIELDS or raw_value is None:
            continue
        values[key] = str(raw_value).strip()

    if not values.get("id"):
        return None
    values.setdefault("date", "")
    values.setdefault("time", "")
    return Slot(**values)


def _normalize_column_name(name: str) -> str:
    return name.strip().lower().replace(" ", "_").replace("-", "_")
