"""
Pytest fixtures: a store on a temporary data file wired into the app.
"""
import pytest
from fastapi.testclient import TestClient

from client.api import TrackerApi
from main import app
from store import JsonApplicationStore, get_store


@pytest.fixture
def data_file(tmp_path):
    """Path of a data file that does not exist yet."""
    return tmp_path / "data" / "applications.json"


@pytest.fixture
def store(data_file):
    """Store backed by the temporary data file."""
    return JsonApplicationStore(data_file)


@pytest.fixture
def client(store):
    """TestClient whose routes use the temporary store."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def api(client):
    """Client-side API wrapper talking to the app in-process."""
    return TrackerApi(client=client)


@pytest.fixture
def acme():
    """Valid payload for a new application."""
    return {"company": "Acme", "role": "SWE", "date": "2026-02-01", "status": "Applied"}
