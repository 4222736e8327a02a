"""
Game sessions: one human against the computer opponent.

The search itself is pure and synchronous. What it cannot do on its own is
keep two searches for the same game from overlapping, or notice that the game
was reset while it was thinking. A ``GameSession`` owns the authoritative
board and provides both:

- While an engine turn is in flight, human moves and new engine turns are
  refused (``SessionBusyError``).
- Every engine turn is tagged with the session's generation. ``reset``
  (a rematch) bumps the generation, so a result computed for the old game is
  recognised as stale and dropped instead of being played on the new board.

The search runs outside the session lock on a copy of the board, so status
queries stay responsive while the opponent is thinking.
"""

import logging
import random
import threading
from dataclasses import dataclass

import chess

from opponent.rules import CHESS_RULES, game_status
from opponent.search import SearchContext
from opponent.selector import Difficulty, get_best_move

_log = logging.getLogger(__name__)


class SessionError(Exception):
    """Base class for requests a session refuses."""


class SessionBusyError(SessionError):
    """The opponent is still choosing a move for this session."""


class GameOverError(SessionError):
    """The game has already ended."""


class NotYourTurnError(SessionError):
    """A move was submitted for the side that is not to move."""


@dataclass(frozen=True)
class SearchTicket:
    """Identifies one engine turn: the game generation and the position searched."""

    generation: int
    fen: str


class GameSession:
    """
    Authoritative state of one game against the computer.

    Attributes:
        difficulty:   Tier used for every engine move.
        engine_color: Side played by the computer.
        board:        Current position. Only replaced under the session lock.
        generation:   Incremented on every reset.
    """

    def __init__(
        self,
        difficulty: Difficulty | str = Difficulty.SHALLOW,
        engine_color: chess.Color = chess.BLACK,
        fen: str | None = None,
    ) -> None:
        self.difficulty = Difficulty.parse(difficulty)
        self.engine_color = engine_color
        self.board = CHESS_RULES.from_fen(fen) if fen else chess.Board()
        self.generation = 0
        self._lock = threading.Lock()
        self._in_flight: SearchTicket | None = None

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def searching(self) -> bool:
        return self._in_flight is not None

    def is_engine_turn(self) -> bool:
        return self.board.turn == self.engine_color and not self.board.is_game_over()

    def status(self) -> str:
        return game_status(self.board)

    def is_current(self, ticket: SearchTicket) -> bool:
        return ticket.generation == self.generation

    # -----------------------------------------------------------------------
    # Human moves
    # -----------------------------------------------------------------------

    def push_human_move(self, uci: str) -> chess.Move:
        """
        Play the human's move given in UCI notation.

        Raises:
            SessionBusyError:       The opponent is still thinking.
            GameOverError:          The game has ended.
            NotYourTurnError:       It is the computer's turn.
            chess.InvalidMoveError: ``uci`` is not valid UCI notation.
            chess.IllegalMoveError: The move is not legal here.
        """
        with self._lock:
            if self._in_flight is not None:
                raise SessionBusyError("the opponent is still thinking")
            if self.board.is_game_over():
                raise GameOverError(self.status())
            if self.board.turn == self.engine_color:
                raise NotYourTurnError("it is the computer's turn")

            move = chess.Move.from_uci(uci)
            self.board = CHESS_RULES.apply_move(self.board, move)
            return move

    # -----------------------------------------------------------------------
    # Engine turns
    # -----------------------------------------------------------------------

    def begin_engine_turn(self) -> SearchTicket | None:
        """
        Mark an engine search as in flight.

        Returns:
            A ticket for the search, or None when it is not the computer's
            turn (including a finished game).

        Raises:
            SessionBusyError: Another engine turn is already in flight.
        """
        with self._lock:
            if self._in_flight is not None:
                raise SessionBusyError("the opponent is already thinking")
            if not self.is_engine_turn():
                return None
            self._in_flight = SearchTicket(self.generation, CHESS_RULES.to_fen(self.board))
            return self._in_flight

    def finish_engine_turn(self, ticket: SearchTicket, move: chess.Move | None) -> bool:
        """
        Apply the result of the search identified by ``ticket``.

        A result from an earlier generation is discarded. A current result
        releases the in-flight marker whether or not a move is played.

        Returns:
            True if ``move`` was played on the board.
        """
        with self._lock:
            if not self.is_current(ticket):
                _log.info(
                    "Discarding stale engine move %s (generation %d, current %d)",
                    move, ticket.generation, self.generation,
                )
                return False

            self._in_flight = None
            if move is None:
                return False
            self.board = CHESS_RULES.apply_move(self.board, move)
            return True

    def play_engine_turn(self, rng: random.Random | None = None) -> chess.Move | None:
        """
        Run one complete engine turn: begin, search, finish.

        Returns:
            The move played, or None if it was not the computer's turn or the
            result went stale during the search.
        """
        ticket = self.begin_engine_turn()
        if ticket is None:
            return None

        # Human moves are refused while the ticket is in flight, so the board
        # only changes under us through reset, which makes the ticket stale.
        with self._lock:
            board = self.board.copy()

        try:
            result = get_best_move(
                board, self.difficulty, rng=rng, context=SearchContext(reference=chess.WHITE)
            )
        except Exception:
            with self._lock:
                if self.is_current(ticket):
                    self._in_flight = None
            raise

        if self.finish_engine_turn(ticket, result.move):
            _log.info(
                "Engine played %s score=%s depth=%d nodes=%d",
                result.move, result.score, result.depth, result.nodes,
            )
            return result.move
        return None

    # -----------------------------------------------------------------------
    # Rematch
    # -----------------------------------------------------------------------

    def reset(self, fen: str | None = None) -> None:
        """Start a new game. Any engine turn still in flight becomes stale."""
        board = CHESS_RULES.from_fen(fen) if fen else chess.Board()
        with self._lock:
            self.generation += 1
            self._in_flight = None
            self.board = board
