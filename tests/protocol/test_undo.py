from __future__ import annotations

from fastapi.testclient import TestClient

from kingside.config import Settings
from kingside.protocol.http.app import create_app


E2E4 = {"from": {"row": 6, "col": 4}, "to": {"row": 4, "col": 4}}


def _played_turn(client: TestClient) -> str:
    gid = client.post("/api/games", json={"level": "beginner"}).json()["game_id"]
    assert client.post(f"/api/games/{gid}/move", json=E2E4).status_code == 200
    assert client.post(f"/api/games/{gid}/ai-move").status_code == 200
    return gid


def test_undo_reverts_full_turn() -> None:
    client = TestClient(create_app(Settings(seed=3)))
    gid = _played_turn(client)
    r = client.post(f"/api/games/{gid}/undo")
    assert r.status_code == 200
    state = r.json()
    assert state["move_history"] == []
    assert state["turn"] == "white"
    assert state["board"][6][4] == {"type": "pawn", "color": "white"}
    assert state["last_move"] is None


def test_undo_single_ply() -> None:
    client = TestClient(create_app(Settings(seed=3)))
    gid = _played_turn(client)
    r = client.post(f"/api/games/{gid}/undo", json={"plies": 1})
    assert r.status_code == 200
    state = r.json()
    assert state["move_history"] == ["e2-e4"]
    assert state["turn"] == "black"


def test_undo_without_history_is_bad_request() -> None:
    client = TestClient(create_app(Settings(seed=3)))
    gid = client.post("/api/games").json()["game_id"]
    r = client.post(f"/api/games/{gid}/undo")
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert err["message"] == "no moves to undo"


def test_undo_rejects_zero_plies() -> None:
    client = TestClient(create_app(Settings(seed=3)))
    gid = _played_turn(client)
    r = client.post(f"/api/games/{gid}/undo", json={"plies": 0})
    assert r.status_code == 422
    fields = [fe["field"] for fe in r.json()["error"]["field_errors"]]
    assert any("plies" in f for f in fields)
