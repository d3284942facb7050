from __future__ import annotations

import random

from checkers.config import Config
from web import create_app


def main() -> None:
    app = create_app(Config(), rng=random.Random(0))
    client = app.test_client()

    # new game
    resp = client.post("/api/new", json={"opponent": "computer"})
    assert resp.status_code == 200, resp.data
    data = resp.get_json()
    assert "board" in data and data["turn"] == "X"

    # make a move and have the computer reply
    resp = client.post("/api/move", json={"move": "3b-4a"})
    assert resp.status_code == 200, resp.data
    data = resp.get_json()
    assert data["ai_moves"]
    print("Smoke OK. Computer replied:", ", ".join(data["ai_moves"]))


if __name__ == "__main__":
    main()
