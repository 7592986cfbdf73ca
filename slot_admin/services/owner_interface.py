from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import lru_cache

from fastapi import HTTPException, status

from slot_admin.core.config import Settings, get_settings
from slot_admin.schemas.owner import (
    OperationStateResponse,
    OwnerActionResponse,
    OwnerStateResponse,
    StatusBannerResponse,
    StoreIdentifierResponse,
)
from slot_admin.schemas.slot import Slot, SlotCreateRequest, SlotStatus, SlotView
from slot_admin.services.link_panel import LinkPanel
from slot_admin.services.operation_state import OperationState
from slot_admin.services.slot_formatting import build_slot_views
from slot_admin.services.slot_store_client import SlotStoreClient, SlotStoreError
from slot_admin.services.status_banner import StatusBanner, TimerFactory
from slot_admin.services.store_identifier import StoreIdentifier, create_store_identifier

logger = logging.getLogger(__name__)

FETCH = "fetch"
ADD = "add"
DELETE = "delete"
OPERATIONS = (FETCH, ADD, DELETE)

_OPERATION_LABELS = {
    FETCH: "Loading slots",
    ADD: "Adding a slot",
    DELETE: "Deleting a slot",
}


class OwnerInterface:
    """
    Server-side state of the owner page.

    Holds the ordered list of Available slots, the status banner, one
    operation state per action and the client link. The slot list is only
    ever replaced by a successful fetch, and every add or delete is followed
    by a fetch so bookings made by clients in the meantime show up.
    """

    def __init__(
        self,
        *,
        store_identifier: StoreIdentifier,
        slot_store_client: SlotStoreClient,
        link_panel: LinkPanel,
        status_banner: StatusBanner,
        clock_millis: Callable[[], int] | None = None,
    ) -> None:
        self.store_identifier = store_identifier
        self.slot_store_client = slot_store_client
        self.link_panel = link_panel
        self.status_banner = status_banner
        self._clock_millis = clock_millis or _epoch_millis
        self._slots: list[Slot] = []
        self._states = {operation: OperationState.idle() for operation in OPERATIONS}
        self._last_slot_millis = 0
        self._lock = threading.Lock()

    @property
    def slots(self) -> list[Slot]:
        with self._lock:
            return list(self._slots)

    def operation_state(self, operation: str) -> OperationState:
        with self._lock:
            return self._states[operation]

    def mount(self) -> OwnerStateResponse:
        if not self.store_identifier.is_configured:
            try:
                self.store_identifier.refresh()
            except SlotStoreError as exc:
                logger.warning("Store identifier unavailable: %s", exc)
                self.status_banner.show_error(str(exc))
        if self.store_identifier.is_configured:
            self.fetch_slots()
        return self.snapshot()

    def fetch_slots(self) -> OwnerActionResponse:
        self._require_store_identifier()
        with self._running(FETCH):
            performed = self._load_slots(announce=True)
        return self._action_response(performed=performed)

    def submit_slot(self, payload: SlotCreateRequest) -> OwnerActionResponse:
        self._require_store_identifier()
        with self._running(ADD):
            slot = Slot(
                id=self._next_slot_id(),
                date=payload.date.isoformat(),
                time=payload.time.strftime("%H:%M"),
                status=SlotStatus.AVAILABLE.value,
            )
            try:
                self.slot_store_client.create_slot(slot)
            except SlotStoreError as exc:
                logger.warning("Adding slot %s failed: %s", slot.id, exc)
                self._finish(ADD, OperationState.failed(str(exc)))
                self.status_banner.show_error(f"Error adding slot: {exc}")
                return self._action_response(performed=False)

            logger.info("Added slot %s on %s at %s", slot.id, slot.date, slot.time)
            self._finish(ADD, OperationState.succeeded(slot))
        self._reload_after_write()
        self.status_banner.show_success("Slot added successfully! Client page automatically updated.")
        return self._action_response(performed=True, reset_form=True)

    def delete_slot(self, slot_id: str, *, confirmed: bool) -> OwnerActionResponse:
        if not confirmed:
            logger.info("Delete of slot %s declined", slot_id)
            return self._action_response(performed=False)

        self._require_store_identifier()
        with self._running(DELETE):
            try:
                self.slot_store_client.delete_slot(slot_id)
            except SlotStoreError as exc:
                logger.warning("Deleting slot %s failed: %s", slot_id, exc)
                self._finish(DELETE, OperationState.failed(str(exc)))
                self.status_banner.show_error(f"Error deleting slot: {exc}")
                return self._action_response(performed=False)

            logger.info("Deleted slot %s", slot_id)
            self._finish(DELETE, OperationState.succeeded(slot_id))

        if not self._reload_after_write():
            with self._lock:
                # The row is gone on the backend even though the list is stale.
                self._slots = [slot for slot in self._slots if slot.id != slot_id]
        self.status_banner.show_success("Slot deleted successfully! Client page automatically updated.")
        return self._action_response(performed=True)

    def copy_client_link(self) -> str:
        client_link = self.link_panel.client_link
        if not client_link:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Client link is not available yet.",
            )
        self.status_banner.show_success("Link copied to clipboard!")
        return client_link

    def set_store_id(self, store_id: str) -> StoreIdentifierResponse:
        if not self.store_identifier.is_editable:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Store identifier is fixed by configuration.",
            )
        self._ensure_not_loading(FETCH)
        self.store_identifier.store_id = store_id
        with self._lock:
            # Rows belong to the previous dataset.
            self._slots = []
        if self.store_identifier.is_configured:
            self.fetch_slots()
        return self.store_identifier_response()

    def refresh_store_id(self) -> StoreIdentifierResponse:
        try:
            self.store_identifier.refresh()
        except SlotStoreError as exc:
            logger.warning("Store identifier refresh failed: %s", exc)
            self.status_banner.show_error(str(exc))
            return self.store_identifier_response()
        if self.store_identifier.is_configured:
            self.fetch_slots()
        return self.store_identifier_response()

    def store_identifier_response(self) -> StoreIdentifierResponse:
        return StoreIdentifierResponse(
            store_id=self.store_identifier.store_id,
            source=self.store_identifier.source,
            configured=self.store_identifier.is_configured,
        )

    def slot_views(self) -> list[SlotView]:
        return build_slot_views(self.slots)

    def banner(self) -> StatusBannerResponse:
        return StatusBannerResponse(
            error=self.status_banner.error,
            success=self.status_banner.success,
        )

    def snapshot(self) -> OwnerStateResponse:
        with self._lock:
            states = dict(self._states)
            slots = list(self._slots)
        return OwnerStateResponse(
            store_id=self.store_identifier.store_id,
            store_configured=self.store_identifier.is_configured,
            client_link=self.link_panel.client_link,
            slots=build_slot_views(slots),
            banner=self.banner(),
            operations={
                operation: OperationStateResponse(status=state.status.value, reason=state.reason)
                for operation, state in states.items()
            },
            busy=any(state.is_loading for state in states.values()),
        )

    def close(self) -> None:
        self.status_banner.close()

    def _load_slots(self, *, announce: bool) -> bool:
        try:
            fetched_slots = self.slot_store_client.list_slots()
        except SlotStoreError as exc:
            logger.warning("Loading slots failed: %s", exc)
            self._finish(FETCH, OperationState.failed(str(exc)))
            self.status_banner.show_error(f"Error loading slots: {exc}")
            return False

        available_slots = [slot for slot in fetched_slots if slot.is_available]
        with self._lock:
            self._slots = available_slots
            self._states[FETCH] = OperationState.succeeded(len(available_slots))
        logger.info(
            "Loaded %s available slots out of %s rows",
            len(available_slots),
            len(fetched_slots),
        )
        if announce:
            self.status_banner.show_success("Slots loaded successfully!")
        return True

    def _reload_after_write(self) -> bool:
        with self._lock:
            self._states[FETCH] = OperationState.loading()
        try:
            return self._load_slots(announce=False)
        finally:
            self._settle(FETCH)

    def _require_store_identifier(self) -> None:
        if not self.store_identifier.is_configured:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Store identifier is not configured.",
            )

    @contextmanager
    def _running(self, operation: str) -> Iterator[None]:
        self._begin(operation)
        try:
            yield
        finally:
            self._settle(operation)

    def _begin(self, operation: str) -> None:
        with self._lock:
            self._raise_if_loading(operation)
            self._states[operation] = OperationState.loading()

    def _ensure_not_loading(self, operation: str) -> None:
        with self._lock:
            self._raise_if_loading(operation)

    def _raise_if_loading(self, operation: str) -> None:
        if self._states[operation].is_loading:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{_OPERATION_LABELS[operation]} already in progress.",
            )

    def _settle(self, operation: str) -> None:
        # Anything that escaped before a result was recorded.
        with self._lock:
            if self._states[operation].is_loading:
                self._states[operation] = OperationState.failed("Operation did not complete.")

    def _finish(self, operation: str, state: OperationState) -> None:
        with self._lock:
            self._states[operation] = state

    def _next_slot_id(self) -> str:
        with self._lock:
            millis = max(self._clock_millis(), self._last_slot_millis + 1)
            self._last_slot_millis = millis
        return f"slot_{millis}"

    def _action_response(self, *, performed: bool, reset_form: bool = False) -> OwnerActionResponse:
        return OwnerActionResponse(
            performed=performed,
            reset_form=reset_form,
            state=self.snapshot(),
        )


def create_owner_interface(
    settings: Settings,
    *,
    timer_factory: TimerFactory | None = None,
) -> OwnerInterface:
    store_identifier = create_store_identifier(settings)
    return OwnerInterface(
        store_identifier=store_identifier,
        slot_store_client=SlotStoreClient(
            api_url=settings.slot_store_api_url,
            store_identifier=store_identifier,
            flavor=settings.slot_store_flavor,
            timeout_seconds=settings.slot_store_timeout_seconds,
        ),
        link_panel=LinkPanel(
            client_base_url=settings.client_base_url,
            store_identifier=store_identifier,
        ),
        status_banner=StatusBanner(
            success_seconds=settings.success_message_seconds,
            error_seconds=settings.error_message_seconds,
            timer_factory=timer_factory,
        ),
    )


@lru_cache
def get_owner_interface() -> OwnerInterface:
    return create_owner_interface(get_settings())


def clear_owner_interface_cache() -> None:
    if get_owner_interface.cache_info().currsize:
        get_owner_interface().close()
    get_owner_interface.cache_clear()


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000
