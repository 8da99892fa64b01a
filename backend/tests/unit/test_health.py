from __future__ import annotations


def test_health_returns_status_and_services(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert data["services"]["database"] == "ok"


def test_readiness_probe(client):
    response = client.get("/api/health/ready")
    assert response.status_code == 200
    assert response.json()["ready"] is True
