from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from marketplace.core.config import settings
from marketplace.core.errors import DuplicateIdentity, InvalidCredentials, NotFound
from marketplace.core.security import hash_password, hash_session_token, verify_password
from marketplace.db.models.provider import ServiceProvider
from marketplace.db.models.session import UserSession
from marketplace.db.models.user import User
from marketplace.schemas.user import CustomerRegister, ProviderRegister
from marketplace.services import auth_service

PASSWORD = "password123"


def test_password_hash_roundtrip():
    hashed = hash_password("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_rejects_malformed_credential():
    assert not verify_password("anything", "not-a-hash")


def test_register_customer_stores_hash(db_session, make_customer):
    user = make_customer("sarah_m")

    assert user.id is not None
    assert user.role == "customer"
    assert user.password_hash != PASSWORD
    assert verify_password(PASSWORD, user.password_hash)
    assert db_session.query(ServiceProvider).count() == 0


def test_register_provider_creates_profile(db_session, make_provider, category):
    user, provider = make_provider("elegant_affairs")

    assert user.role == "provider"
    assert provider.user_id == user.id
    assert provider.category_id == category.id
    assert provider.rating == 0
    assert provider.review_count == 0
    assert provider.tags == ["Weddings", "Receptions"]


def test_register_duplicate_username_keeps_first_user(db_session, make_customer):
    first = make_customer("sarah_m")

    with pytest.raises(DuplicateIdentity):
        auth_service.register(db_session, CustomerRegister(
            role="customer",
            username="sarah_m",
            password="another-password",
            email="someone.else@example.com",
            full_name="Someone Else",
        ))

    stored = db_session.query(User).filter(User.username == "sarah_m").one()
    assert stored.id == first.id
    assert stored.email == "sarah_m@example.com"
    token, user = auth_service.login(db_session, "sarah_m", PASSWORD)
    assert user.id == first.id


def test_register_duplicate_email_is_case_insensitive(db_session, make_customer):
    make_customer("sarah_m")

    with pytest.raises(DuplicateIdentity):
        auth_service.register(db_session, CustomerRegister(
            role="customer",
            username="sarah_two",
            password=PASSWORD,
            email="Sarah_M@Example.com",
            full_name="Sarah Two",
        ))


def test_register_provider_unknown_category(db_session):
    with pytest.raises(NotFound):
        auth_service.register(db_session, ProviderRegister(
            role="provider",
            username="ghost_co",
            password=PASSWORD,
            email="ghost@example.com",
            full_name="Ghost Co",
            company_name="Ghost Co",
            category_id=999,
        ))
    assert db_session.query(User).count() == 0


def test_login_rejects_bad_credentials(db_session, make_customer):
    make_customer("sarah_m")

    with pytest.raises(InvalidCredentials):
        auth_service.login(db_session, "sarah_m", "wrong-password")
    with pytest.raises(InvalidCredentials):
        auth_service.login(db_session, "nobody", PASSWORD)


def test_session_lifecycle(db_session, make_customer):
    customer = make_customer("sarah_m")

    token, user = auth_service.login(db_session, "sarah_m", PASSWORD)
    assert user.id == customer.id
    assert auth_service.current_user(db_session, token).id == customer.id

    auth_service.logout(db_session, token)
    assert auth_service.current_user(db_session, token) is None

    # idempotent
    auth_service.logout(db_session, token)
    auth_service.logout(db_session, None)


def test_expired_session_is_rejected(db_session, make_customer):
    make_customer("sarah_m")
    token, _ = auth_service.login(db_session, "sarah_m", PASSWORD)

    session = db_session.query(UserSession).filter(UserSession.token_hash == hash_session_token(token)).one()
    session.expires_at = datetime.utcnow() - timedelta(minutes=1)
    db_session.commit()

    assert auth_service.current_user(db_session, token) is None


def test_login_purges_expired_sessions(db_session, make_customer):
    make_customer("sarah_m")
    old_token, _ = auth_service.login(db_session, "sarah_m", PASSWORD)
    db_session.query(UserSession).update({UserSession.expires_at: datetime.utcnow() - timedelta(days=1)})
    db_session.commit()

    auth_service.login(db_session, "sarah_m", PASSWORD)

    hashes = [s.token_hash for s in db_session.query(UserSession).all()]
    assert len(hashes) == 1
    assert hash_session_token(old_token) not in hashes


# --- HTTP ---

def test_register_endpoint_hides_password(client):
    response = client.post("/api/auth/register", json={
        "role": "customer",
        "username": "james_t",
        "password": PASSWORD,
        "email": "james@example.com",
        "full_name": "James Thompson",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "james_t"
    assert body["role"] == "customer"
    assert "password" not in body
    assert "password_hash" not in body


def test_register_endpoint_requires_provider_fields(client, category):
    response = client.post("/api/auth/register", json={
        "role": "provider",
        "username": "party_perfect",
        "password": PASSWORD,
        "email": "info@partyperfect.com",
        "full_name": "Party Perfect",
    })

    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidInput"


def test_register_endpoint_rejects_unknown_role(client):
    response = client.post("/api/auth/register", json={
        "role": "admin",
        "username": "root_user",
        "password": PASSWORD,
        "email": "root@example.com",
        "full_name": "Root User",
    })

    assert response.status_code == 400


def test_register_endpoint_duplicate(client, make_customer):
    make_customer("sarah_m")

    response = client.post("/api/auth/register", json={
        "role": "customer",
        "username": "sarah_m",
        "password": PASSWORD,
        "email": "new@example.com",
        "full_name": "Sarah Again",
    })

    assert response.status_code == 400
    assert response.json()["kind"] == "DuplicateIdentity"


def test_login_logout_over_http(client, make_customer):
    make_customer("sarah_m")

    assert client.get("/api/auth/user").status_code == 401

    response = client.post("/api/auth/login", json={"username": "sarah_m", "password": PASSWORD})
    assert response.status_code == 200
    token = response.json()["token"]
    assert response.json()["user"]["username"] == "sarah_m"

    me = client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["username"] == "sarah_m"

    assert client.post("/api/auth/logout").status_code == 204
    assert client.get("/api/auth/user").status_code == 401

    # the token is dead server-side too, not just dropped from the cookie jar
    stale = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert stale.status_code == 401
    assert stale.json()["kind"] == "Unauthenticated"


def test_bearer_token_used_when_cookie_is_stale(app, client, make_customer):
    make_customer("sarah_m")
    token = client.post("/api/auth/login", json={"username": "sarah_m", "password": PASSWORD}).json()["token"]

    other = TestClient(app)
    other.cookies.set(settings.session_cookie_name, "no-longer-valid")
    me = other.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == 200
    assert me.json()["username"] == "sarah_m"


def test_login_endpoint_invalid_credentials(client, make_customer):
    make_customer("sarah_m")

    response = client.post("/api/auth/login", json={"username": "sarah_m", "password": "nope-nope"})

    assert response.status_code == 401
    assert response.json()["kind"] == "InvalidCredentials"
