import os
import uuid
from datetime import datetime

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_dashboard.sqlite")

from fastapi.testclient import TestClient  # noqa: E402

from dashboard.deps import get_now  # noqa: E402
from dashboard.main import app  # noqa: E402

FIXED_NOW = datetime(2025, 1, 1, 10, 0)  # a Wednesday


@pytest.fixture
def client():
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def headers():
    # Fresh user per test keeps the shared sqlite file isolated
    return {"X-User-Id": f"user-{uuid.uuid4().hex[:8]}"}
