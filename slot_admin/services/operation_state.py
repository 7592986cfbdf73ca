from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class OperationStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationState:
    status: OperationStatus = OperationStatus.IDLE
    data: Any = None
    reason: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.status is OperationStatus.LOADING

    @classmethod
    def idle(cls) -> OperationState:
        return cls()

    @classmethod
    def loading(cls) -> OperationState:
        return cls(status=OperationStatus.LOADING)

    @classmethod
    def succeeded(cls, data: Any = None) -> OperationState:
        return cls(status=OperationStatus.SUCCEEDED, data=data)

    @classmethod
    def failed(cls, reason: str) -> OperationState:
        return cls(status=OperationStatus.FAILED, reason=reason)
