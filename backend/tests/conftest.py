import pytest
from fastapi.testclient import TestClient
from authapi.core.config import Settings
from authapi.core.database import build_engine, build_session_factory, init_db
from authapi.core.security import build_password_context
from authapi.main import create_app
from authapi.services.auth_service import AuthService
from authapi.services.user_store import UserStore

# Low work factor keeps the suite fast; production uses the default
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL="sqlite://", BCRYPT_ROUNDS=TEST_BCRYPT_ROUNDS, _env_file=None)


@pytest.fixture
def store():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield UserStore(build_session_factory(engine))
    engine.dispose()


@pytest.fixture
def auth_service(store):
    return AuthService(store, build_password_context(TEST_BCRYPT_ROUNDS))


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """Register ann and return the request payload merged with the response body"""
    payload = {"name": "ann", "email": "ann@x.com", "password": "pw1"}
    response = client.post("/users", json=payload)
    assert response.status_code == 201
    return {**payload, **response.json()}
