# tests/test_health.py
from fastapi import status
from fastapi.testclient import TestClient


def test_health_check(client: TestClient) -> None:
    """The liveness probe answers without touching storage."""
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"ok": True}


def test_root_describes_service(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["name"] == "Lantern API"
