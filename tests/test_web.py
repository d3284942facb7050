from __future__ import annotations

import threading

import pytest

from checkers.config import Config
from web import create_app


@pytest.fixture
def client(first_choice):
    app = create_app(Config(), rng=first_choice)
    return app.test_client()


def new_game(client, opponent="player"):
    r = client.post("/api/new", json={"opponent": opponent})
    assert r.status_code == 200
    return r.get_json()


def test_index_page(client):
    r = client.get("/")
    assert r.status_code == 200
    assert b"Checkers" in r.data


def test_new_game_snapshot(client):
    data = new_game(client)
    assert data["turn"] == "X"
    assert data["game_over"] is False
    assert data["board"][0] == "_X_X_X_X"
    assert data["opponent"] == "player"
    assert data["selected"] is None


def test_text_move_gets_computer_reply(client):
    new_game(client, "computer")
    r = client.post("/api/move", json={"move": "3b-4a"})
    assert r.status_code == 200
    data = r.get_json()
    assert data["ai_moves"] == ["6a-5b"]
    assert data["turn"] == "X"
    assert data["board"][3] == "X_______"
    assert data["board"][4] == "_O______"


@pytest.mark.parametrize("payload", [{}, {"move": "e2e4"}, {"move": "3b-2a"}])
def test_bad_text_moves(client, payload):
    new_game(client)
    r = client.post("/api/move", json=payload)
    assert r.status_code == 400
    assert "error" in r.get_json()


def test_click_select_then_move(client):
    new_game(client)
    data = client.post("/api/click", json={"row": 2, "col": 1}).get_json()
    assert data["selected"] == [2, 1]

    data = client.post("/api/click", json={"row": 3, "col": 0}).get_json()
    assert data["selected"] is None
    assert data["board"][3][0] == "X"
    assert data["turn"] == "O"


def test_click_on_opponent_piece_does_not_select(client):
    new_game(client)
    data = client.post("/api/click", json={"row": 5, "col": 0}).get_json()
    assert data["selected"] is None
    assert data["message"]


def test_failed_move_clears_selection(client):
    new_game(client)
    client.post("/api/click", json={"row": 2, "col": 1})
    data = client.post("/api/click", json={"row": 4, "col": 1}).get_json()
    assert data["selected"] is None
    assert data["message"] == "Invalid move"
    assert data["turn"] == "X"


@pytest.mark.parametrize("payload", [{}, {"row": "a", "col": 1}, {"row": 8, "col": 0}])
def test_bad_clicks(client, payload):
    new_game(client)
    r = client.post("/api/click", json=payload)
    assert r.status_code == 400


def test_unknown_opponent(client):
    r = client.post("/api/new", json={"opponent": "robot"})
    assert r.status_code == 400


def test_state_endpoint(client):
    r = client.get("/api/state")
    assert r.status_code == 200
    assert r.get_json()["pieces"] == {"X": 12, "O": 12}


def test_requests_wait_for_the_session_lock():
    app = create_app(Config(opponent_enabled=False))
    lock = app.extensions["checkers"]["lock"]
    app.test_client().post("/api/click", json={"row": 2, "col": 1})
    responses = []

    def click():
        responses.append(app.test_client().post("/api/click", json={"row": 3, "col": 0}))

    with lock:
        worker = threading.Thread(target=click)
        worker.start()
        worker.join(timeout=0.2)
        assert worker.is_alive()
        assert app.extensions["checkers"]["state"]["session"].selected == [2, 1]

    worker.join(timeout=5)
    assert not worker.is_alive()
    data = responses[0].get_json()
    assert data["board"][3][0] == "X"
    assert data["turn"] == "O"
