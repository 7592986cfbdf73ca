import pytest
from fastapi.testclient import TestClient

from slot_admin.core.config import get_settings
from slot_admin.main import app


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORE_ID_SOURCE", "Owner")
    monkeypatch.setenv("SLOT_STORE_FLAVOR", "unknown")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_health_endpoint_returns_expected_shape() -> None:
    client = TestClient(app)
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "service" in data
    assert "timestamp" in data
    assert data["store_id_source"] == "owner"
    assert data["slot_store_flavor"] == "sheet"
