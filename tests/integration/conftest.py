import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import register_exception_handlers, routers


@pytest.fixture()
def client():
    app = FastAPI()
    for router in routers:
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def login(client, make_user):
    """Register a user with ``role`` and return ``(user, auth headers)``."""

    def _login(email="ada@example.com", password="s3cret-pass", role="user", **extra):
        user = make_user(email=email, password=password, role=role, **extra)
        response = client.post("/api/sessions/login", json={"email": email, "password": password})
        assert response.status_code == 200
        token = response.json()["payload"]["token"]
        return user, {"Authorization": f"Bearer {token}"}

    return _login
