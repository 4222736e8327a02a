"""
Move selection: turns a position and a difficulty tier into one move.

The selector is where colour and difficulty policy live:

- The random tier picks a uniformly random legal move and never searches.
- The searching tiers score every candidate with ``minimax`` at the tier's
  depth. The mover keeps the highest score if it is the reference side and
  the lowest score otherwise.

Candidates are shuffled before scoring and compared with a strict ``>`` or
``<``. The first candidate to reach the best score wins, so shuffling turns
ties into a random draw among equally good moves. This is what gives the
computer opponent some variety in the opening; keep it.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any

import chess

from opponent.constants import DIFFICULTY_ALIASES, DIFFICULTY_DEPTHS, INF
from opponent.search import SearchContext, minimax

_log = logging.getLogger(__name__)


class Difficulty(str, Enum):
    """Difficulty tiers, weakest first."""

    RANDOM = "random"
    SHALLOW = "shallow"
    DEEP = "deep"
    DEEPEST = "deepest"

    @classmethod
    def parse(cls, name: "str | Difficulty") -> "Difficulty":
        """
        Look up a tier by value or by the web client's label.

        Accepts "random", "shallow", "deep", "deepest" as well as the setup
        screen labels "Beginner", "Easy", "Hard" and "Master", ignoring case.

        Raises:
            ValueError: ``name`` names no tier.
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        key = DIFFICULTY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown difficulty: {name!r}") from None

    @property
    def depth(self) -> int | None:
        """Search depth in plies, or None for the random tier."""
        return DIFFICULTY_DEPTHS.get(self.value)


@dataclass
class SelectionResult:
    """
    Outcome of one move selection.

    Attributes:
        move:  The chosen move, or None when the side to move has no legal
               moves (the game is over).
        score: Reference-side score of the chosen move, or None when no
               search was performed (random tier, or no move).
        depth: Ply depth searched. Zero for the random tier.
        nodes: Positions visited by the search.
    """

    move: Any | None
    score: int | None
    depth: int
    nodes: int


def get_best_move(
    position: Any,
    difficulty: Difficulty | str,
    *,
    depth: int | None = None,
    rng: random.Random | None = None,
    shuffle: bool = True,
    context: SearchContext | None = None,
) -> SelectionResult:
    """
    Choose a move for the side to move in ``position``.

    Args:
        position:   Current position. Not modified.
        difficulty: Tier, as a ``Difficulty`` or any name ``Difficulty.parse``
                    accepts.
        depth:      Optional ply depth overriding the tier's depth. Ignored
                    by the random tier.
        rng:        Random source for the random tier and for shuffling.
                    Pass a seeded ``random.Random`` for reproducible games.
        shuffle:    Shuffle candidates before scoring. With ``shuffle=False``
                    candidates are scored in the rules engine's order and the
                    result is fully deterministic.
        context:    Search context (rules adapter, reference side, evaluator).
                    A fresh python-chess context scored for White by default.

    Returns:
        SelectionResult. ``move`` is None only when there are no legal moves.

    Raises:
        ValueError: ``depth`` is negative or ``difficulty`` is unknown.
    """
    difficulty = Difficulty.parse(difficulty)
    if depth is not None and depth < 0:
        raise ValueError(f"search depth must be non-negative, got {depth}")

    context = context if context is not None else SearchContext()
    rng = rng if rng is not None else random.Random()
    rules = context.rules

    moves = list(rules.legal_moves(position))
    if not moves:
        return SelectionResult(move=None, score=None, depth=0, nodes=0)

    if difficulty is Difficulty.RANDOM:
        return SelectionResult(move=rng.choice(moves), score=None, depth=0, nodes=0)

    if depth is None:
        depth = difficulty.depth

    mover_is_reference = rules.side_to_move(position) == context.reference

    candidates = list(moves)
    if shuffle:
        rng.shuffle(candidates)

    best_move = None
    best_score = -INF if mover_is_reference else INF

    for move in candidates:
        try:
            child = rules.apply_move(position, move)
        except chess.IllegalMoveError:
            _log.warning("Skipping candidate %s rejected by the rules engine", move)
            continue

        # After our move it is the opponent's turn: they maximize exactly
        # when we are not the reference side.
        score = minimax(child, max(depth - 1, 0), -INF, INF, not mover_is_reference, context)

        if mover_is_reference:
            if score > best_score:
                best_score, best_move = score, move
        elif score < best_score:
            best_score, best_move = score, move

    if best_move is None:
        _log.warning("No candidate was scored; falling back to %s", moves[0])
        return SelectionResult(move=moves[0], score=None, depth=depth, nodes=context.node_count)

    _log.debug(
        "Selected %s score=%d depth=%d nodes=%d difficulty=%s",
        best_move,
        best_score,
        depth,
        context.node_count,
        difficulty.value,
    )
    return SelectionResult(move=best_move, score=best_score, depth=depth, nodes=context.node_count)


def select_move(
    position: Any,
    difficulty: Difficulty | str,
    *,
    depth: int | None = None,
    rng: random.Random | None = None,
    shuffle: bool = True,
    context: SearchContext | None = None,
) -> Any | None:
    """Return the move chosen by ``get_best_move``, or None if the game is over."""
    return get_best_move(
        position, difficulty, depth=depth, rng=rng, shuffle=shuffle, context=context
    ).move
