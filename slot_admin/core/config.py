from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

SLOT_STORE_FLAVORS = frozenset({"sheet", "internal"})
STORE_ID_SOURCES = frozenset({"constant", "fetched", "owner"})


class Settings(BaseSettings):
    app_name: str = "Slot Admin"
    app_env: str = "development"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    allowed_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    slot_store_api_url: str = "https://sheetdb.io/api/v1"
    slot_store_flavor: str = "sheet"
    slot_store_timeout_seconds: float = 10.0
    store_id_source: str = "constant"
    store_id: str = ""
    store_id_source_url: str = "http://localhost:3000/api/spreadsheet-id"
    client_base_url: str = "https://client-interface-pearl.vercel.app"
    success_message_seconds: float = 3.0
    error_message_seconds: float = 5.0
    fetch_slots_on_startup: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("slot_store_flavor", mode="before")
    @classmethod
    def normalize_slot_store_flavor(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in SLOT_STORE_FLAVORS:
            return "sheet"
        return normalized_value

    @field_validator("store_id_source", mode="before")
    @classmethod
    def normalize_store_id_source(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in STORE_ID_SOURCES:
            return "constant"
        return normalized_value

    @field_validator("store_id", mode="before")
    @classmethod
    def normalize_store_id(cls, value: str) -> str:
        return value.strip()

    @field_validator("slot_store_timeout_seconds", mode="before")
    @classmethod
    def normalize_slot_store_timeout(cls, value: float | str) -> float:
        parsed_value = float(value)
        if parsed_value <= 0:
            return 10.0
        return parsed_value

    @field_validator("success_message_seconds", mode="before")
    @classmethod
    def normalize_success_message_seconds(cls, value: float | str) -> float:
        parsed_value = float(value)
        if parsed_value <= 0:
            return 3.0
        return parsed_value

    @field_validator("error_message_seconds", mode="before")
    @classmethod
    def normalize_error_message_seconds(cls, value: float | str) -> float:
        parsed_value = float(value)
        if parsed_value <= 0:
            return 5.0
        return parsed_value


@lru_cache
def get_settings() -> Settings:
    return Settings()
