"""Fixtures compartidas: SQLite en memoria, bcrypt rápido y un TestClient."""

import os

# Debe ir antes de importar emprecords: Settings() se crea al importar
os.environ["KEY_SECRET"] = "test-signing-key"
os.environ["URL_DATABASE_SQL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RESET_TOKEN_DELIVERY"] = "response"
os.environ["DISCORD_WEBHOOK_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from emprecords import models  # noqa: F401
from emprecords.database import Base, engine, SessionLocal
from emprecords.main import app


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Sesión para pruebas de servicios/repositorios. No mantenerla abierta entre llamadas HTTP."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def count_rows():
    """Cuenta filas con una sesión de vida corta (segura entre llamadas HTTP)."""

    def _count(model) -> int:
        session = SessionLocal()
        try:
            return session.query(model).count()
        finally:
            session.close()

    return _count


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def alice(client):
    response = client.post(
        "/api/register",
        json={
            "userName": "alice",
            "mobileNumber": "9876543210",
            "password": "Passw0rd!",
            "confirmPassword": "Passw0rd!",
        },
    )
    assert response.status_code == 201
    return {"userName": "alice", "mobileNumber": "9876543210", "password": "Passw0rd!"}


@pytest.fixture
def auth_headers(client, alice):
    response = client.post("/api/login", json={"userName": alice["userName"], "password": alice["password"]})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


@pytest.fixture
def employee_payload():
    return {
        "empID": "E1",
        "empName": "Ravi Kumar",
        "designation": "Engineer",
        "department": "R&D",
        "joinedDate": "2024-01-15",
        "salary": 55000,
        "addressLine1": "12 MG Road",
        "addressLine2": "Suite 4",
        "city": "Bengaluru",
        "state": "KA",
        "country": "India",
    }
