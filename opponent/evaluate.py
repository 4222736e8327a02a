"""
Static evaluation: material plus pawn and knight placement.

The score is always expressed from one fixed reference side, White unless the
caller says otherwise. Positive means the reference side is ahead, negative
means its opponent is. The search never negates this value; instead its
``maximizing`` flag says which side prefers high scores at a given node.

Only pawns and knights have positional tables. This is a deliberate
simplification: adding tables for the other pieces changes playing strength
and should be done as a conscious evaluation change, not in passing.
"""

import chess

from opponent.constants import PIECE_VALUES, PST


def evaluate(board: chess.Board, reference: chess.Color = chess.WHITE) -> int:
    """
    Material-point evaluation from ``reference``'s perspective.

    Each piece contributes its material value plus, for pawns and knights, a
    square bonus. The tables are written from White's point of view; a White
    piece reads them through the rank-flipped square (``sq ^ 56``) and a Black
    piece through the square itself, which mirrors the table vertically.

    Args:
        board:     The position to score. Not modified.
        reference: The side whose advantage counts as positive.

    Returns:
        Integer score. Zero means balanced.

    Example:
        >>> import chess
        >>> evaluate(chess.Board())
        0
    """
    score = 0

    for sq, piece in board.piece_map().items():
        value = PIECE_VALUES[piece.piece_type]

        table = PST.get(piece.piece_type)
        if table is not None:
            idx = sq ^ 56 if piece.color == chess.WHITE else sq
            value += table[idx]

        if piece.color == reference:
            score += value
        else:
            score -= value

    return score
