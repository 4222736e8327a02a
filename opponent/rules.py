"""
Rules adapter: the narrow view of the rules engine that the search consumes.

The opponent never generates moves or detects mate itself. Everything it
needs from the rules of chess goes through an object implementing the
``Rules`` protocol below. ``ChessRules`` implements it on top of python-chess;
tests substitute small synthetic game trees.

Positions are treated as immutable values. ``apply_move`` returns a new
board and leaves its argument untouched, so a missed undo can never leak
state from one search branch into a sibling.
"""

from typing import Any, Hashable, Protocol, Sequence, runtime_checkable

import chess


@runtime_checkable
class Rules(Protocol):
    """
    Operations the opponent needs from a rules engine.

    The search only walks the tree through legal_moves, apply_move,
    is_game_over and side_to_move. The rest serve status reporting and
    sessions.
    """

    def legal_moves(self, position: Any) -> Sequence[Any]: ...

    def apply_move(self, position: Any, move: Any) -> Any: ...

    def is_game_over(self, position: Any) -> bool: ...

    def is_checkmate(self, position: Any) -> bool: ...

    def is_draw(self, position: Any) -> bool: ...

    def side_to_move(self, position: Any) -> Hashable: ...

    def to_fen(self, position: Any) -> str: ...

    def from_fen(self, fen: str) -> Any: ...


class ChessRules:
    """``Rules`` implementation backed by ``chess.Board``."""

    def legal_moves(self, position: chess.Board) -> list[chess.Move]:
        # python-chess generates moves in a fixed order for a given position,
        # which keeps searches reproducible when shuffling is disabled.
        return list(position.legal_moves)

    def apply_move(self, position: chess.Board, move: chess.Move) -> chess.Board:
        """
        Return the position reached by playing ``move``.

        Raises:
            chess.IllegalMoveError: ``move`` is not legal in ``position``.
        """
        if not position.is_legal(move):
            raise chess.IllegalMoveError(f"illegal move {move.uci()} in {position.fen()}")
        child = position.copy()
        child.push(move)
        return child

    def is_game_over(self, position: chess.Board) -> bool:
        return position.is_game_over()

    def is_checkmate(self, position: chess.Board) -> bool:
        return position.is_checkmate()

    def is_draw(self, position: chess.Board) -> bool:
        """True for stalemate, insufficient material and the automatic draw rules."""
        outcome = position.outcome()
        return outcome is not None and outcome.winner is None

    def side_to_move(self, position: chess.Board) -> chess.Color:
        return position.turn

    def to_fen(self, position: chess.Board) -> str:
        return position.fen()

    def from_fen(self, fen: str) -> chess.Board:
        """
        Decode a FEN string.

        Raises:
            ValueError: ``fen`` is malformed.
        """
        return chess.Board(fen)


CHESS_RULES = ChessRules()


def game_status(board: chess.Board) -> str:
    """
    Human-readable status line shown under the board.

    Returns "active" while the game is running, otherwise one of
    "Checkmate! White wins.", "Checkmate! Black wins.", "Draw!" or
    "Game Over.".
    """
    if not CHESS_RULES.is_game_over(board):
        return "active"
    if CHESS_RULES.is_checkmate(board):
        # The side to move is the side that has been mated.
        winner = "Black" if board.turn == chess.WHITE else "White"
        return f"Checkmate! {winner} wins."
    if CHESS_RULES.is_draw(board):
        return "Draw!"
    return "Game Over."
