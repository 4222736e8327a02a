"""Tests for the FastAPI endpoints."""

import chess
import pytest
from fastapi.testclient import TestClient

from opponent.session import SearchTicket
from web import app as app_module


HANGING_QUEEN = "rnb1kbnr/pppp1ppp/8/4p1q1/3P4/2N5/PPP1PPPP/R1BQKBNR w KQkq - 0 3"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


@pytest.fixture
def client():
    app_module._games.clear()
    yield TestClient(app_module.app)
    app_module._games.clear()


# ════════════════════════════════════════════════════════════════════════════
#  STATELESS MOVE ENDPOINT
# ════════════════════════════════════════════════════════════════════════════


class TestMoveEndpoint:
    def test_random_move_from_start(self, client):
        response = client.post("/api/move", json={"fen": chess.STARTING_FEN, "difficulty": "Beginner"})
        assert response.status_code == 200
        data = response.json()
        assert chess.Move.from_uci(data["move"]) in chess.Board().legal_moves
        assert data["score"] is None
        assert data["depth"] == 0
        assert data["status"] == "active"

    def test_searching_tier_takes_queen(self, client):
        response = client.post("/api/move", json={"fen": HANGING_QUEEN, "difficulty": "easy"})
        assert response.status_code == 200
        data = response.json()
        assert data["move"] == "c1g5"
        assert data["depth"] == 2
        assert data["score"] > 0
        assert data["nodes"] > 0

        board = chess.Board(HANGING_QUEEN)
        board.push_uci("c1g5")
        assert data["fen"] == board.fen()

    def test_default_difficulty(self, client):
        response = client.post("/api/move", json={"fen": HANGING_QUEEN})
        assert response.status_code == 200
        assert response.json()["depth"] == 2

    def test_invalid_fen(self, client):
        response = client.post("/api/move", json={"fen": "invalid", "difficulty": "random"})
        assert response.status_code == 400
        assert "Invalid FEN" in response.json()["detail"]

    def test_game_over(self, client):
        response = client.post("/api/move", json={"fen": FOOLS_MATE, "difficulty": "random"})
        assert response.status_code == 400
        assert "Checkmate" in response.json()["detail"]

    def test_unknown_difficulty(self, client):
        response = client.post("/api/move", json={"fen": chess.STARTING_FEN, "difficulty": "godlike"})
        assert response.status_code == 422


# ════════════════════════════════════════════════════════════════════════════
#  ROOMS
# ════════════════════════════════════════════════════════════════════════════


class TestRooms:
    def _create(self, client, **body):
        body.setdefault("difficulty", "random")
        response = client.post("/api/games", json=body)
        assert response.status_code == 200
        return response.json()

    def test_create_human_first(self, client):
        data = self._create(client)
        assert data["fen"] == chess.STARTING_FEN
        assert data["turn"] == "white"
        assert data["engine_color"] == "black"
        assert data["engine_move"] is None
        assert data["generation"] == 0
        assert len(data["legal_moves"]) == 20

    def test_create_engine_first(self, client):
        data = self._create(client, engine_color="white")
        assert data["engine_move"] is not None
        assert data["turn"] == "black"

    def test_create_invalid_color(self, client):
        response = client.post("/api/games", json={"engine_color": "green"})
        assert response.status_code == 422

    def test_create_invalid_fen(self, client):
        response = client.post("/api/games", json={"fen": "invalid"})
        assert response.status_code == 400

    def test_get_game(self, client):
        game_id = self._create(client)["game_id"]
        response = client.get(f"/api/games/{game_id}")
        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_unknown_game(self, client):
        assert client.get("/api/games/nope").status_code == 404
        assert client.post("/api/games/nope/move", json={"move": "e2e4"}).status_code == 404

    def test_move_and_reply(self, client):
        game_id = self._create(client)["game_id"]
        response = client.post(f"/api/games/{game_id}/move", json={"move": "e2e4"})
        assert response.status_code == 200
        data = response.json()
        assert data["engine_move"] is not None
        assert data["turn"] == "white"

        board = chess.Board()
        board.push_uci("e2e4")
        assert chess.Move.from_uci(data["engine_move"]) in board.legal_moves

    def test_illegal_move(self, client):
        game_id = self._create(client)["game_id"]
        response = client.post(f"/api/games/{game_id}/move", json={"move": "e2e5"})
        assert response.status_code == 400
        assert "Illegal move" in response.json()["detail"]

    def test_garbage_move(self, client):
        game_id = self._create(client)["game_id"]
        response = client.post(f"/api/games/{game_id}/move", json={"move": "zzzz"})
        assert response.status_code == 400
        assert "Invalid UCI move" in response.json()["detail"]

    def test_move_after_game_over(self, client):
        game_id = self._create(client, fen=FOOLS_MATE)["game_id"]
        response = client.post(f"/api/games/{game_id}/move", json={"move": "e2e4"})
        assert response.status_code == 400

    def test_move_while_engine_thinking(self, client):
        game_id = self._create(client)["game_id"]
        session = app_module._games[game_id]
        session._in_flight = SearchTicket(session.generation, session.board.fen())
        response = client.post(f"/api/games/{game_id}/move", json={"move": "e2e4"})
        assert response.status_code == 409

    def test_rematch(self, client):
        game_id = self._create(client)["game_id"]
        client.post(f"/api/games/{game_id}/move", json={"move": "e2e4"})
        response = client.post(f"/api/games/{game_id}/reset", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["fen"] == chess.STARTING_FEN
        assert data["generation"] == 1

    def test_rematch_discards_in_flight_search(self, client):
        game_id = self._create(client)["game_id"]
        session = app_module._games[game_id]
        session.push_human_move("e2e4")
        ticket = session.begin_engine_turn()

        client.post(f"/api/games/{game_id}/reset", json={})
        assert session.finish_engine_turn(ticket, chess.Move.from_uci("e7e5")) is False

        response = client.post(f"/api/games/{game_id}/move", json={"move": "d2d4"})
        assert response.status_code == 200
        assert response.json()["engine_move"] is not None
