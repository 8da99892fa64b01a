from unittest.mock import AsyncMock, patch

import pytest
from starlette.testclient import TestClient

from enterprise_directory.main import app


def test_root_returns_message(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Enterprise Directory API"


def test_health_returns_version(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["version"] == "0.1.0"


def test_startup_aborts_when_seeding_fails():
    with patch(
        "enterprise_directory.main.employee_service.seed_example_employees",
        new=AsyncMock(side_effect=RuntimeError("seed failed")),
    ):
        with pytest.raises(RuntimeError, match="seed failed"):
            with TestClient(app):
                pass
