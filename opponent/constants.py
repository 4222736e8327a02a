"""
Opponent constants: piece values, positional tables, search bounds, and
difficulty tiers.

All numeric constants used by the evaluator, search and move selector are
defined here so tuning never requires touching the algorithms.

Piece values use the "material point" scale of the web client: a pawn is
worth 10 points, a queen 90. The king value is not a tradeable unit; it only
makes lines that lose the king dominate the sum.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (material points)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 10
KNIGHT_VALUE: int = 30
BISHOP_VALUE: int = 30
ROOK_VALUE: int = 50
QUEEN_VALUE: int = 90
KING_VALUE: int = 900

# Mapping from python-chess piece type constants to material points.
PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Positional tables
# ---------------------------------------------------------------------------
# Written from White's point of view, laid out visually: index 0 is a8 and
# index 63 is h1. python-chess numbers squares from a1 = 0, so a White piece
# on square sq reads index sq ^ 56 and a Black piece reads index sq.
#
# Only pawns and knights carry a table. Other piece kinds score material only.

PAWN_TABLE: tuple[int, ...] = (
      0,   0,   0,   0,   0,   0,   0,   0,
     50,  50,  50,  50,  50,  50,  50,  50,
     10,  10,  20,  30,  30,  20,  10,  10,
      5,   5,  10,  25,  25,  10,   5,   5,
      0,   0,   0,  20,  20,   0,   0,   0,
      5,  -5, -10,   0,   0, -10,  -5,   5,
      5,   5,   5,  -5,  -5,   5,   5,   5,
      0,   0,   0,   0,   0,   0,   0,   0,
)

KNIGHT_TABLE: tuple[int, ...] = (
    -50, -40, -30, -30, -30, -30, -40, -50,
    -40, -20,   0,   0,   0,   0, -20, -40,
    -30,   0,  10,  15,  15,  10,   0, -30,
    -30,   5,  15,  20,  20,  15,   5, -30,
    -30,   0,  15,  20,  20,  15,   0, -30,
    -30,   5,  10,  15,  15,  10,   5, -30,
    -40, -20,   0,   5,   5,   0, -20, -40,
    -50, -40, -30, -30, -30, -30, -40, -50,
)

PST: dict[int, tuple[int, ...]] = {
    chess.PAWN:   PAWN_TABLE,
    chess.KNIGHT: KNIGHT_TABLE,
}

# ---------------------------------------------------------------------------
# Search bounds
# ---------------------------------------------------------------------------
# INF stands in for an infinite alpha/beta bound. It must exceed any score the
# evaluator can produce: two kings plus every other piece promoted to a queen
# with maximal table bonuses stays far below it.

INF: int = 1_000_000

# ---------------------------------------------------------------------------
# Difficulty tiers
# ---------------------------------------------------------------------------
# Ply depth per searching tier. The random tier performs no search and has no
# entry here. A full-width search without move ordering takes seconds per
# move at 4 plies in the middlegame, so 3 is the ceiling and the top two tiers
# share it, as in the web client.

DIFFICULTY_DEPTHS: dict[str, int] = {
    "shallow": 2,
    "deep":    3,
    "deepest": 3,
}

# Labels used by the web client's setup screen.
DIFFICULTY_ALIASES: dict[str, str] = {
    "beginner": "random",
    "easy":     "shallow",
    "hard":     "deep",
    "master":   "deepest",
}
