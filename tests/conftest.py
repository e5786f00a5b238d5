import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.db.base import Base, get_db, init_db
from marketplace.db.models.category import ServiceCategory
from marketplace.main import create_app
from marketplace.schemas.user import CustomerRegister, ProviderRegister
from marketplace.services import auth_service, catalog_service

PASSWORD = "password123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def app(session_factory):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def login(app):
    """Return a TestClient holding a session cookie for the given user."""

    def _login(username, password=PASSWORD):
        client = TestClient(app)
        response = client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return client

    return _login


def add_category(db, name="Wedding Events"):
    category = ServiceCategory(
        name=name,
        description=f"{name} planning and coordination",
        image_url="https://images.example.com/category.jpg",
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def make_category(db_session):
    return lambda name: add_category(db_session, name)


@pytest.fixture
def category(db_session):
    return add_category(db_session)


@pytest.fixture
def make_customer(db_session):
    def _make(username="sarah_m", password=PASSWORD):
        return auth_service.register(db_session, CustomerRegister(
            role="customer",
            username=username,
            password=password,
            email=f"{username}@example.com",
            full_name=username.replace("_", " ").title(),
        ))

    return _make


@pytest.fixture
def make_provider(db_session, category):
    """Register a provider user; returns ``(user, provider_profile)``."""

    def _make(username="elegant_affairs", password=PASSWORD, category_id=None):
        user = auth_service.register(db_session, ProviderRegister(
            role="provider",
            username=username,
            password=password,
            email=f"{username}@example.com",
            full_name=username.replace("_", " ").title(),
            company_name=username.replace("_", " ").title(),
            category_id=category_id or category.id,
            location="New York, NY",
            experience=8,
            tags=["Weddings", "Receptions"],
        ))
        return user, catalog_service.get_provider_by_user(db_session, user.id)

    return _make
