import pytest
from fastapi.testclient import TestClient

from cronsight.main import app


@pytest.fixture
def client():
    """Provide a TestClient with the app's startup and shutdown run around each test."""
    with TestClient(app) as c:
        yield c
