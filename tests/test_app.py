import pytest

from marketplace.core.errors import (
    DuplicateIdentity,
    Forbidden,
    InvalidCredentials,
    InvalidInput,
    InvalidTransition,
    NotFound,
    Unauthenticated,
)


def test_root_reports_running(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.json()["message"]


@pytest.mark.parametrize("error, status_code", [
    (InvalidInput, 400),
    (DuplicateIdentity, 400),
    (InvalidTransition, 400),
    (InvalidCredentials, 401),
    (Unauthenticated, 401),
    (Forbidden, 403),
    (NotFound, 404),
])
def test_error_kinds_map_to_status(error, status_code):
    exc = error("boom")

    assert exc.status_code == status_code
    assert exc.kind == error.__name__
    assert exc.message == "boom"


def test_malformed_body_is_invalid_input(client):
    response = client.post("/api/auth/login", json={"username": "sarah_m"})

    assert response.status_code == 400
    body = response.json()
    assert body["kind"] == "InvalidInput"
    assert body["errors"]
