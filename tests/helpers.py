"""Shared credentials and session helpers for HTTP tests."""

ADMIN = {"email": "admin@example.com", "password": "adminpass"}


def login(client, credentials=ADMIN):
    response = client.post("/auth/login", json=credentials)
    assert response.status_code == 200
    return response
