import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from membership_api.api.v1.dependencies import get_store
from membership_api.config import get_settings
from membership_api.main import create_app

API = "/api/v1"


@pytest.fixture
def app(fake_store) -> FastAPI:
    """The real application wired to the in-memory store. The lifespan (and its engine) never runs."""
    app = create_app(get_settings())
    app.dependency_overrides[get_store] = lambda: fake_store
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def member_payload(faker):
    def _make(**overrides) -> dict:
        data = {
            "name": faker.name(),
            "email": faker.unique.email(),
            "phone_number": faker.numerify("##########"),
            "address": faker.street_address(),
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def created_member_json(client, member_payload) -> dict:
    resp = client.post(f"{API}/members", json=member_payload())
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def created_sport_json(client) -> dict:
    resp = client.post(f"{API}/sports", json={"name": "Tennis", "description": "Clay courts"})
    assert resp.status_code == 201
    return resp.json()
