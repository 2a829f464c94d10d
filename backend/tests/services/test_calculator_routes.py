"""Calculator Routes - end-to-end tests through the FastAPI app.

Invariants:
    - POST /sessions returns 201 with the initial view
    - Actions and key presses return the new view
    - Arithmetic failures are 200 with the sentinel, never error envelopes
    - Malformed bodies return 400 VALIDATION_ERROR with the path session id
    - Unknown sessions return 404 RESOURCE_NOT_FOUND
    - Session limit returns 429 SESSION_LIMIT_REACHED
"""

from uuid import uuid4

from tapecalc.core.domain_types import NOT_A_NUMBER


def _digit(d: str) -> dict:
    return {"action": "digit", "digit": d}


def _op(op: str) -> dict:
    return {"action": "operator", "operator": op}


EQUALS = {"action": "equals"}


async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_create_session(client):
    res = await client.post("/api/v1/sessions")
    assert res.status_code == 201
    body = res.json()
    assert body["display_text"] == "0"
    assert body["history_text"] == ""
    assert body["tape"] == []
    assert body["tape_visible"] is False
    assert body["memory"] == "0"


async def test_get_session(client, session_id):
    res = await client.get(f"/api/v1/sessions/{session_id}")
    assert res.status_code == 200
    assert res.json()["session_id"] == session_id


async def test_list_sessions(client, session_id):
    res = await client.get("/api/v1/sessions")
    assert res.status_code == 200
    assert res.json() == {"sessions": [session_id], "total": 1}


async def test_addition(send):
    res = await send(_digit("1"), _op("+"), _digit("2"), EQUALS)
    assert res.status_code == 200
    assert res.json()["display_text"] == "3"
    assert res.json()["tape"] == ["1 + 2 = 3"]


async def test_history_text_while_pending(send):
    res = await send(_digit("1"), _digit("2"), _digit("3"), _digit("4"), _op("*"))
    assert res.json()["history_text"] == "1,234 *"


async def test_division_by_zero_returns_sentinel(send):
    res = await send(_digit("5"), _digit("0"), _op("/"), _digit("0"), EQUALS)
    assert res.status_code == 200
    assert res.json()["display_text"] == NOT_A_NUMBER
    assert res.json()["tape"] == []


async def test_memory_round_trip(send):
    res = await send(
        _digit("5"), {"action": "mplus"}, {"action": "mc"}, {"action": "mr"},
    )
    assert res.json()["display_text"] == "0"
    assert res.json()["memory"] == "0"


async def test_toggle_history_visible(send):
    res = await send({"action": "toggleHistoryVisible"})
    assert res.json()["tape_visible"] is True


async def test_missing_digit_payload_is_400(send):
    res = await send({"action": "digit"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_validation_error_carries_session_id(send, session_id):
    res = await send({"action": "operator", "operator": "^"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["context"] == {"session_id": session_id}
    assert error["details"]


async def test_malformed_session_id_is_echoed_in_context(client):
    res = await client.get("/api/v1/sessions/not-a-uuid")
    assert res.json()["error"]["context"] == {"session_id": "not-a-uuid"}


async def test_unknown_action_is_400(send):
    res = await send({"action": "pow"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_action_on_unknown_session_is_404(client):
    res = await client.post(
        f"/api/v1/sessions/{uuid4()}/actions", json=EQUALS,
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_malformed_session_id_is_400(client):
    res = await client.get("/api/v1/sessions/not-a-uuid")
    assert res.status_code == 400


async def test_key_presses(client, session_id):
    for key in ["7", "*", "6"]:
        await client.post(f"/api/v1/sessions/{session_id}/keys", json={"key": key})
    res = await client.post(
        f"/api/v1/sessions/{session_id}/keys", json={"key": "Enter"},
    )
    assert res.status_code == 200
    assert res.json()["handled"] is True
    assert res.json()["display_text"] == "42"


async def test_unbound_key_is_ignored(client, session_id):
    res = await client.post(
        f"/api/v1/sessions/{session_id}/keys", json={"key": "x"},
    )
    assert res.status_code == 200
    assert res.json()["handled"] is False
    assert res.json()["display_text"] == "0"


async def test_tape_get_and_clear(client, session_id, send):
    await send(_digit("3"), {"action": "square"})
    res = await client.get(f"/api/v1/sessions/{session_id}/tape")
    assert res.json() == {"session_id": session_id, "entries": ["(3)² = 9"]}

    res = await client.delete(f"/api/v1/sessions/{session_id}/tape")
    assert res.status_code == 204
    res = await client.get(f"/api/v1/sessions/{session_id}/tape")
    assert res.json()["entries"] == []


async def test_delete_session(client, session_id):
    res = await client.delete(f"/api/v1/sessions/{session_id}")
    assert res.status_code == 204
    res = await client.get(f"/api/v1/sessions/{session_id}")
    assert res.status_code == 404


async def test_delete_unknown_session_is_404(client):
    res = await client.delete(f"/api/v1/sessions/{uuid4()}")
    assert res.status_code == 404


async def test_session_limit_is_429(client):
    for _ in range(3):
        res = await client.post("/api/v1/sessions")
        assert res.status_code == 201
    res = await client.post("/api/v1/sessions")
    assert res.status_code == 429
    assert res.json()["error"]["code"] == "SESSION_LIMIT_REACHED"
