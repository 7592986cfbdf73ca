from datetime import UTC, datetime

from slot_admin.core.config import Settings
from slot_admin.schemas.health import HealthResponse


class HealthService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def get_status(self) -> HealthResponse:
        return HealthResponse(
            status="ok",
            service=self.settings.app_name,
            store_id_source=self.settings.store_id_source,
            slot_store_flavor=self.settings.slot_store_flavor,
            timestamp=datetime.now(UTC),
        )
