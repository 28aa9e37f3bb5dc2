import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.user import User


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_user(client: TestClient, email: str, password: str):
    return client.post("/auth/register", json={"email": email, "password": password})


def test_register_returns_user_without_password():
    client = TestClient(app)
    response = register_user(client, "staff@example.com", "secret")
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "staff@example.com"
    assert "hashed_password" not in data


def test_duplicate_registration_rejected():
    client = TestClient(app)
    register_user(client, "dup@example.com", "secret")
    response = register_user(client, "dup@example.com", "secret")
    assert response.status_code == 400


def test_successful_login_returns_token():
    client = TestClient(app)
    register_user(client, "login@example.com", "secret")
    response = client.post("/auth/login", json={"email": "login@example.com", "password": "secret"})
    assert response.status_code == 200
    data = response.json()
    assert data.get("token_type") == "bearer"
    assert isinstance(data.get("access_token"), str) and data["access_token"]


def test_wrong_password_returns_400():
    client = TestClient(app)
    register_user(client, "wrongpw@example.com", "secret")
    response = client.post("/auth/login", json={"email": "wrongpw@example.com", "password": "bad"})
    assert response.status_code == 400


def test_inactive_user_cannot_log_in():
    client = TestClient(app)
    register_user(client, "inactive@example.com", "secret")
    db = SessionLocal()
    user = db.query(User).filter(User.email == "inactive@example.com").first()
    user.is_active = False
    db.commit()
    db.close()
    response = client.post("/auth/login", json={"email": "inactive@example.com", "password": "secret"})
    assert response.status_code == 400


def test_me_requires_token():
    client = TestClient(app)
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"}).status_code == 401


def test_me_returns_current_user():
    client = TestClient(app)
    register_user(client, "me@example.com", "secret")
    token = client.post("/auth/login", json={"email": "me@example.com", "password": "secret"}).json()["access_token"]
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "me@example.com"


@pytest.mark.parametrize("path", ["/customers", "/invoices", "/settings/facility", "/dashboard/summary"])
def test_business_routes_require_authentication(path):
    client = TestClient(app)
    response = client.get(path)
    assert response.status_code == 401
