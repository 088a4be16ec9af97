# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from blomsterlan.db.engine import build_engine, get_engine
from blomsterlan.db.schema import metadata
from blomsterlan.main import app


@pytest.fixture
def engine(tmp_path):
    """Fresh SQLite file per test."""
    engine = build_engine(f"sqlite:///{tmp_path / 'test.sqlite'}")
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine):
    """TestClient wired to the per-test database (lifespan is not run)."""
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anna(client):
    r = client.post("/api/customers", json={"name": "Anna", "company": "Annas Blommor"})
    assert r.status_code == 201
    return r.json()


@pytest.fixture
def hink(client):
    r = client.post("/api/items", json={"name": "Hink 10L", "category": "Hinkar"})
    assert r.status_code == 201
    return r.json()


def post_transaction(client, customer_id, item_id, quantity, type="delivery", note=None):
    r = client.post(
        "/api/transactions",
        json={
            "customerId": customer_id,
            "itemId": item_id,
            "quantity": quantity,
            "type": type,
            "note": note,
        },
    )
    assert r.status_code == 201, r.text
    return r.json()
