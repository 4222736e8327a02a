#!/usr/bin/env python3
"""
Benchmark: nodes visited and time per move for each difficulty tier.

Depth is the only thing bounding the opponent's thinking time, so every
change to the evaluator, the search or the tier depths should be checked
here: a tier that takes more than a few hundred milliseconds on these
positions is too deep for interactive play.

With --verify, each position is also searched without pruning at depth 2 and
the two values are compared.

Usage: python3 tools/bench.py [--tiers shallow deep deepest] [--seed 1] [--verify]
"""
import argparse
import os
import random
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

import chess

from opponent.constants import INF
from opponent.search import SearchContext, minimax, plain_minimax
from opponent.selector import Difficulty, get_best_move

# Fixed positions spanning opening, middlegame and endgame, with both sides
# to move. Keep them stable so runs stay comparable.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"),
    ("Sicilian",     "rnbqkbnr/pp1ppppp/8/2p5/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2"),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Hanging Q",    "rnb1kbnr/pppp1ppp/8/4p1q1/3P4/2N5/PPP1PPPP/R1BQKBNR w KQkq - 0 3"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(label: str, fen: str, difficulty: Difficulty, seed: int) -> dict:
    """
    Select a move for one position and collect metrics.

    Returns:
        Dict with keys: label, move, depth, score, nodes, nps, time_ms.
    """
    board = chess.Board(fen)
    start = time.monotonic()
    result = get_best_move(board, difficulty, rng=random.Random(seed))
    time_ms = max(1, int((time.monotonic() - start) * 1000))
    return {
        "label": label,
        "move": result.move.uci() if result.move else "(none)",
        "depth": result.depth,
        "score": result.score if result.score is not None else 0,
        "nodes": result.nodes,
        "nps": result.nodes * 1000 // time_ms,
        "time_ms": time_ms,
    }


def verify_pruning(fen: str, depth: int = 2) -> tuple[int, int, int, int]:
    """Return (pruned value, pruned nodes, plain value, plain nodes)."""
    board = chess.Board(fen)
    maximizing = board.turn == chess.WHITE
    pruned = SearchContext()
    plain = SearchContext()
    a = minimax(board, depth, -INF, INF, maximizing, pruned)
    b = plain_minimax(board, depth, maximizing, plain)
    return a, pruned.node_count, b, plain.node_count


def main() -> None:
    """Run all benchmark positions for the selected tiers and print a table."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--tiers",
        nargs="+",
        default=["shallow", "deep", "deepest"],
        help="difficulty tiers to run (default: shallow deep deepest)",
    )
    parser.add_argument("--seed", type=int, default=1, help="shuffle seed")
    parser.add_argument("--verify", action="store_true", help="compare against unpruned minimax")
    args = parser.parse_args()

    print(f"Chess opponent benchmark - {sys.executable}")
    print()

    for name in args.tiers:
        difficulty = Difficulty.parse(name)
        print(f"Tier: {difficulty.value} (depth {difficulty.depth})")
        print(
            f"{'Position':<14} {'Move':<7} {'Depth':>5} {'Score':>6} "
            f"{'Nodes':>9} {'NPS':>8} {'Time(ms)':>9}"
        )
        print("-" * 64)

        results = []
        for label, fen in POSITIONS:
            r = run_position(label, fen, difficulty, args.seed)
            results.append(r)
            print(
                f"{r['label']:<14} {r['move']:<7} {r['depth']:>5} {r['score']:>6} "
                f"{r['nodes']:>9,} {r['nps']:>8,} {r['time_ms']:>9,}"
            )

        valid = [r for r in results if r["nodes"] > 0]
        if valid:
            avg_nodes = sum(r["nodes"] for r in valid) // len(valid)
            avg_time = sum(r["time_ms"] for r in valid) // len(valid)
            worst = max(r["time_ms"] for r in valid)
            print("-" * 64)
            print(f"{'AVERAGE':<14} {'':<7} {'':>5} {'':>6} {avg_nodes:>9,} {'':>8} {avg_time:>9,}")
            print(f"{'WORST':<14} {'':<7} {'':>5} {'':>6} {'':>9} {'':>8} {worst:>9,}")
        print()

    if args.verify:
        print("Pruned vs. plain minimax at depth 2")
        for label, fen in POSITIONS:
            a, an, b, bn = verify_pruning(fen)
            mark = "ok" if a == b else "MISMATCH"
            print(f"{label:<14} {a:>6} {an:>8,} {b:>6} {bn:>8,}  {mark}")


if __name__ == "__main__":
    main()
