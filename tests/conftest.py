# tests/conftest.py
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from yieldgap.api.http import app  # ensures imports resolve; run tests from repo root


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def fixed_now():
    return datetime(2024, 4, 1, 9, 0, tzinfo=timezone.utc)
