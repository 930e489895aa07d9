"""Shared fixtures: an in-memory store seeded with the demo data."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from dental_center.deps import get_store
from dental_center.main import app
from dental_center.services.auth import AuthSession
from dental_center.services.kv import MemoryBackend
from dental_center.services.storage import ClinicStore


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> ClinicStore:
    clinic_store = ClinicStore(backend)
    clinic_store.initialize()
    return clinic_store


@pytest.fixture
def session(store: ClinicStore) -> AuthSession:
    return AuthSession(store)


@pytest.fixture
def client(store: ClinicStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    response = client.post(
        "/auth/login",
        json={"email": "admin@entnt.in", "password": "admin123"},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def patient_client(client: TestClient) -> TestClient:
    response = client.post(
        "/auth/login",
        json={"email": "john@entnt.in", "password": "patient123"},
    )
    assert response.status_code == 200
    return client
