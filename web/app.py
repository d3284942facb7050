from __future__ import annotations

from flask import Flask, jsonify, request, render_template
import logging
import random
import sys
import threading
from pathlib import Path
from typing import Dict, List, Optional

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from checkers import MoveGenerator, RulesEngine, parse_move
from checkers.ai import RandomSource
from checkers.config import Config
from checkers.game import in_bounds

logger = logging.getLogger(__name__)


class Session:
    """The one game served by an app, plus the GUI's current selection."""

    def __init__(self, opponent_enabled: bool, cfg: Config, rng: RandomSource) -> None:
        self.engine = RulesEngine()
        self.opponent: Optional[MoveGenerator] = (
            MoveGenerator(self.engine, cfg.opponent.side_enum, rng) if opponent_enabled else None
        )
        self.selected: Optional[List[int]] = None
        self.stalled = False

    def play_computer(self) -> List[str]:
        """Let the computer move while it holds the turn (chain captures included)."""
        moves: List[str] = []
        if self.opponent is None:
            return moves
        while not self.engine.is_game_ended() and self.engine.get_current_side() is self.opponent.side:
            move = self.opponent.choose_move()
            if not move:
                self.stalled = True
                break
            moves.append(move)
        return moves

    def snapshot(self, ai_moves: Optional[List[str]] = None, message: Optional[str] = None) -> Dict[str, object]:
        snap = self.engine.snapshot()
        if self.stalled and self.opponent is not None:
            # Computer could not move on its turn: treat as its stalemate.
            snap["game_over"] = True
            snap["winner"] = self.opponent.side.opponent.value
        snap["selected"] = self.selected
        snap["ai_moves"] = ai_moves or []
        snap["opponent"] = "computer" if self.opponent is not None else "player"
        snap["message"] = message
        return snap

    def is_over(self) -> bool:
        return self.engine.is_game_ended() or self.stalled


def create_app(cfg: Optional[Config] = None, rng: Optional[RandomSource] = None) -> Flask:
    app = Flask(__name__, static_folder="static", template_folder="templates")

    cfg = cfg or Config()
    source: RandomSource = rng if rng is not None else random.Random(cfg.opponent.seed)
    default_opponent = cfg.opponent_enabled if cfg.opponent_enabled is not None else True
    # Single writer: every request touching the session holds this lock.
    lock = threading.Lock()
    state = {"session": Session(default_opponent, cfg, source)}
    state["session"].play_computer()
    app.extensions["checkers"] = {"lock": lock, "state": state}

    @app.get("/")
    def index():
        return render_template("index.html")

    @app.get("/api/state")
    def api_state():
        with lock:
            return jsonify(state["session"].snapshot())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        opponent = (data.get("opponent") or ("computer" if default_opponent else "player")).lower()
        if opponent not in ("computer", "player"):
            return jsonify({"error": f"Unknown opponent: {opponent}"}), 400

        logger.info("New game against %s", opponent)
        with lock:
            session = Session(opponent == "computer", cfg, source)
            state["session"] = session
            # If the computer plays X it opens the game
            ai_moves = session.play_computer()
            return jsonify(session.snapshot(ai_moves))

    @app.post("/api/click")
    def api_click():
        payload = request.get_json(silent=True) or {}
        try:
            row, col = int(payload["row"]), int(payload["col"])
        except (KeyError, TypeError, ValueError):
            return jsonify({"error": "Expected integer 'row' and 'col'"}), 400
        if not in_bounds(row, col):
            return jsonify({"error": f"Square out of range: {row}, {col}"}), 400

        with lock:
            session: Session = state["session"]
            if session.is_over():
                return jsonify(session.snapshot(message="Game is over"))

            engine = session.engine
            if session.selected is None:
                board = engine.get_board()
                if board[row][col].side is engine.get_current_side():
                    session.selected = [row, col]
                    return jsonify(session.snapshot())
                return jsonify(session.snapshot(message="Select one of your own pieces"))

            start_row, start_col = session.selected
            session.selected = None
            if not engine.apply_move(start_row, start_col, row, col):
                return jsonify(session.snapshot(message="Invalid move"))

            ai_moves = session.play_computer()
            return jsonify(session.snapshot(ai_moves))

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        text = payload.get("move")
        if not text or not isinstance(text, str):
            return jsonify({"error": "Missing move"}), 400

        try:
            move = parse_move(text)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        with lock:
            session: Session = state["session"]
            if session.is_over():
                return jsonify({"error": "Game is over"}), 400
            session.selected = None
            if not session.engine.apply_move(move.start_row, move.start_col, move.end_row, move.end_col):
                return jsonify({"error": f"Illegal move: {text}"}), 400

            ai_moves = session.play_computer()
            return jsonify(session.snapshot(ai_moves))

    return app


if __name__ == "__main__":
    from checkers.config import load_config
    from checkers.log import setup_logging

    config = load_config()
    setup_logging(config.log_level)
    create_app(config).run(host=config.web.host, port=config.web.port, debug=True)
