"""
Computer opponent for the chess web client.

Chooses the computer's reply with a depth-limited minimax search with
alpha-beta pruning over a material and piece-placement evaluation. Legal
moves, move application and game-over detection come from python-chess.

Modules:
    constants - Piece values, positional tables, search bounds, tier depths
    rules     - Rules engine adapter and game status text
    evaluate  - Static evaluation from a fixed reference side
    search    - Alpha-beta minimax (and an unpruned reference)
    selector  - Difficulty tiers and move selection
    session   - Per-game locking and stale-result detection
"""

from opponent.evaluate import evaluate
from opponent.rules import CHESS_RULES, ChessRules, Rules, game_status
from opponent.search import SearchContext, minimax, plain_minimax
from opponent.selector import Difficulty, SelectionResult, get_best_move, select_move
from opponent.session import (
    GameOverError,
    GameSession,
    NotYourTurnError,
    SearchTicket,
    SessionBusyError,
    SessionError,
)
