"""Service test fixtures - isolated session registry + FastAPI test client.

Invariants:
    - Every test gets a fresh SessionRegistry (max 3 sessions)
    - get_registry dependency overridden so routes use that registry
"""

import pytest
from httpx import ASGITransport, AsyncClient

from tapecalc.main import app
from tapecalc.services.session_registry import SessionRegistry, get_registry


@pytest.fixture
def registry():
    return SessionRegistry(max_sessions=3)


@pytest.fixture
async def client(registry):
    """FastAPI test client with the registry dependency overridden."""
    app.dependency_overrides[get_registry] = lambda: registry

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def session_id(client):
    res = await client.post("/api/v1/sessions")
    return res.json()["session_id"]


@pytest.fixture
def send(client, session_id):
    """Post a sequence of actions; returns the last response."""

    async def _send(*actions: dict):
        res = None
        for body in actions:
            res = await client.post(
                f"/api/v1/sessions/{session_id}/actions", json=body,
            )
        return res

    return _send
