# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import Settings
from database import get_db
from main import create_app
from models import Base, Role, User
from core.security import get_password_hash


TEST_SECRET = "test-secret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(session_factory):
    app = create_app(Settings(JWT_SECRET=TEST_SECRET))

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def token_service(app):
    return app.state.token_service


@pytest.fixture
def register(client):
    def _register(email="alice@example.com", name="Alice", password="secret1"):
        r = client.post("/api/auth/register", json={"email": email, "name": name, "password": password})
        assert r.status_code == 201, r.text
        return r.json()
    return _register


@pytest.fixture
def admin_token(db, token_service):
    admin = User(
        email="admin@example.com",
        name="Admin",
        password_hash=get_password_hash("adminpass"),
        role=Role.ADMIN,
    )
    db.add(admin)
    db.commit()
    return token_service.issue(admin.id, Role.ADMIN)
