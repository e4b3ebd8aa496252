"""Integration tests for the profile and health endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_profile_and_timezone(client: TestClient, csrf_headers) -> None:
    client.post("/auth/signup", json={"email": "user@example.com", "password": "correct horse battery"})

    profile = client.get("/users/me")
    invalid = client.put(
        "/users/me/timezone", json={"timezone": "Mars/Olympus"}, headers=csrf_headers()
    )
    region = client.put(
        "/users/me/timezone", json={"timezone": "America"}, headers=csrf_headers()
    )
    updated = client.put(
        "/users/me/timezone", json={"timezone": "Europe/Madrid"}, headers=csrf_headers()
    )

    assert profile.status_code == 200
    assert profile.json()["timezone"] == "UTC"
    assert profile.json()["has_push_subscription"] is False
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid timezone"
    assert region.status_code == 400
    assert region.json()["detail"] == "Invalid timezone"
    assert updated.json()["timezone"] == "Europe/Madrid"
    assert client.get("/users/me").json()["timezone"] == "Europe/Madrid"


def test_timezone_requires_csrf(client: TestClient) -> None:
    client.post("/auth/signup", json={"email": "user@example.com", "password": "correct horse battery"})

    assert client.put("/users/me/timezone", json={"timezone": "UTC"}).status_code == 403


def test_profile_update(client: TestClient, csrf_headers) -> None:
    client.post("/auth/signup", json={"email": "user@example.com", "password": "correct horse battery"})
    body = {"display_name": " Ada ", "timezone": "Asia/Tokyo", "week_start": "sunday"}

    updated = client.put("/users/me", json=body, headers=csrf_headers())
    invalid = client.put(
        "/users/me", json={**body, "week_start": "someday"}, headers=csrf_headers()
    )
    missing_csrf = client.put("/users/me", json=body)

    assert updated.status_code == 200
    assert updated.json()["display_name"] == "Ada"
    assert updated.json()["week_start"] == "sunday"
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid week start value"
    assert missing_csrf.status_code == 403
    assert client.get("/users/me").json()["timezone"] == "Asia/Tokyo"


def test_email_update(client: TestClient, csrf_headers) -> None:
    client.post("/auth/signup", json={"email": "user@example.com", "password": "correct horse battery"})

    wrong_password = client.put(
        "/users/me/email",
        json={"new_email": "new@example.com", "password": "not my password"},
        headers=csrf_headers(),
    )
    missing_csrf = client.put(
        "/users/me/email",
        json={"new_email": "new@example.com", "password": "correct horse battery"},
    )
    updated = client.put(
        "/users/me/email",
        json={"new_email": "new@example.com", "password": "correct horse battery"},
        headers=csrf_headers(),
    )

    assert wrong_password.status_code == 400
    assert wrong_password.json()["detail"] == "Invalid password"
    assert missing_csrf.status_code == 403
    assert updated.status_code == 200
    assert updated.json()["email"] == "new@example.com"
    assert updated.json()["email_verified"] is False
