"""
Minimax search with alpha-beta pruning over a fixed-perspective evaluation.

The evaluator scores every position from one reference side. Rather than
negating scores at each level (negamax), the recursion carries a
``maximizing`` flag: nodes where the reference side is to move take the
maximum of their children, the others take the minimum. A leaf returns the
evaluator's score unchanged.

Alpha-beta pruning keeps two running bounds:
    alpha  the best score the maximizing side is already guaranteed
    beta   the best score the minimizing side is already guaranteed
Once ``beta <= alpha`` the remaining siblings cannot change the result and
are skipped. Pruning affects how many nodes are visited, never the value
returned; ``plain_minimax`` exists so tests and the benchmark can check that.

There is no timeout. Node count grows roughly as branching_factor ** depth,
so the ply depth chosen by the difficulty tier is the only resource control.
"""

import functools
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable

import chess

from opponent.constants import INF
from opponent.evaluate import evaluate
from opponent.rules import CHESS_RULES, Rules


@dataclass
class SearchContext:
    """
    Per-selection search state.

    One context is created for each move selection and discarded afterwards.
    Nothing in it is shared between concurrent searches.

    Attributes:
        rules:      Rules engine adapter used for move generation, move
                    application and game-over detection.
        reference:  The side the evaluator scores for. Fixed for the whole
                    search.
        evaluator:  Callable scoring a position from ``reference``'s point of
                    view. Defaults to ``evaluate`` bound to ``reference``.
        node_count: Number of positions visited so far.
    """

    rules: Rules = field(default_factory=lambda: CHESS_RULES)
    reference: Hashable = chess.WHITE
    evaluator: Callable[[Any], int] | None = None
    node_count: int = 0

    def __post_init__(self) -> None:
        if self.evaluator is None:
            self.evaluator = functools.partial(evaluate, reference=self.reference)


def minimax(
    position: Any,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    context: SearchContext,
) -> int:
    """
    Alpha-beta minimax value of ``position``.

    Args:
        position:   Position to search. Never mutated; children are produced
                    with ``context.rules.apply_move``.
        depth:      Remaining plies. At zero the position is evaluated.
        alpha:      Lower bound of the search window.
        beta:       Upper bound of the search window.
        maximizing: True when the side to move prefers high scores, i.e.
                    when it is the reference side.
        context:    Rules, evaluator and node counter for this search.

    Returns:
        Score from the reference side's perspective.
    """
    context.node_count += 1
    rules = context.rules

    if depth <= 0 or rules.is_game_over(position):
        return context.evaluator(position)

    moves = rules.legal_moves(position)
    if not moves:
        # No legal moves is game over even if the rules adapter did not say so.
        return context.evaluator(position)

    if maximizing:
        best = -INF
        for move in moves:
            child = rules.apply_move(position, move)
            best = max(best, minimax(child, depth - 1, alpha, beta, False, context))
            alpha = max(alpha, best)
            if beta <= alpha:
                break
        return best

    best = INF
    for move in moves:
        child = rules.apply_move(position, move)
        best = min(best, minimax(child, depth - 1, alpha, beta, True, context))
        beta = min(beta, best)
        if beta <= alpha:
            break
    return best


def plain_minimax(position: Any, depth: int, maximizing: bool, context: SearchContext) -> int:
    """Unpruned minimax with the same terminal rules as ``minimax``."""
    context.node_count += 1
    rules = context.rules

    if depth <= 0 or rules.is_game_over(position):
        return context.evaluator(position)

    moves = rules.legal_moves(position)
    if not moves:
        return context.evaluator(position)

    scores = [
        plain_minimax(rules.apply_move(position, move), depth - 1, not maximizing, context)
        for move in moves
    ]
    return max(scores) if maximizing else min(scores)

