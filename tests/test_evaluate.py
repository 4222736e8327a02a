"""Tests for the static evaluator."""

import chess
import pytest

from opponent.constants import KNIGHT_TABLE, PAWN_TABLE, PIECE_VALUES
from opponent.evaluate import evaluate


MIRROR_FENS = [
    chess.STARTING_FEN,
    "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1",
    "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
    "rnb1kbnr/pppp1ppp/8/4p1q1/3P4/2N5/PPP1PPPP/R1BQKBNR w KQkq - 0 3",
    "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1",
    "4k3/8/8/3N4/8/8/P7/4K3 w - - 0 1",
]


class TestMaterial:
    def test_starting_position_is_balanced(self):
        assert evaluate(chess.Board()) == 0

    def test_bare_kings_cancel(self):
        assert evaluate(chess.Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1")) == 0

    def test_piece_without_table_scores_material_only(self):
        board = chess.Board("4k3/8/8/8/8/8/8/2B1K3 w - - 0 1")
        assert evaluate(board) == PIECE_VALUES[chess.BISHOP]

    def test_extra_queen_for_black_is_negative(self):
        board = chess.Board("3qk3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert evaluate(board) == -PIECE_VALUES[chess.QUEEN]

    def test_side_to_move_does_not_matter(self):
        white = chess.Board("3qk3/8/8/8/8/8/8/4K3 w - - 0 1")
        black = chess.Board("3qk3/8/8/8/8/8/8/4K3 b - - 0 1")
        assert evaluate(white) == evaluate(black)


class TestPositionalTables:
    def test_central_white_knight_bonus(self):
        board = chess.Board("4k3/8/8/8/3N4/8/8/4K3 w - - 0 1")
        # d4 is on the fifth row of the visually laid-out table.
        assert evaluate(board) == PIECE_VALUES[chess.KNIGHT] + KNIGHT_TABLE[4 * 8 + 3]
        assert KNIGHT_TABLE[4 * 8 + 3] == 20

    def test_corner_knight_penalty(self):
        board = chess.Board("4k3/8/8/8/8/8/8/N3K3 w - - 0 1")
        assert evaluate(board) == PIECE_VALUES[chess.KNIGHT] - 50

    def test_advanced_white_pawn_rewarded(self):
        advanced = chess.Board("4k3/4P3/8/8/8/8/8/4K3 w - - 0 1")
        home = chess.Board("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1")
        assert evaluate(advanced) == PIECE_VALUES[chess.PAWN] + 50
        assert evaluate(home) == PIECE_VALUES[chess.PAWN] + PAWN_TABLE[6 * 8 + 4]
        assert evaluate(advanced) > evaluate(home)

    def test_black_pawn_uses_mirrored_square(self):
        # A Black pawn on e2 is one step from promoting.
        board = chess.Board("4k3/8/8/8/8/8/4p3/K7 w - - 0 1")
        assert evaluate(board) == -(PIECE_VALUES[chess.PAWN] + 50)


class TestSymmetry:
    @pytest.mark.parametrize("fen", MIRROR_FENS)
    def test_mirrored_position_negates_score(self, fen):
        board = chess.Board(fen)
        assert evaluate(board.mirror()) == -evaluate(board)

    @pytest.mark.parametrize("fen", MIRROR_FENS)
    def test_reference_side_flips_sign(self, fen):
        board = chess.Board(fen)
        assert evaluate(board, reference=chess.BLACK) == -evaluate(board, reference=chess.WHITE)

    def test_does_not_modify_board(self):
        board = chess.Board(MIRROR_FENS[2])
        before = board.fen()
        evaluate(board)
        assert board.fen() == before
