"""
Exhaustive minimax from the computer player's perspective.
Scoring policy:
- A win for the computer scores 10 - depth, a loss scores depth - 10, a draw 0.
- Depth weighting prefers faster wins and slower losses.
- At the top level the lowest index among equally scored moves is chosen.
Every branch works on its own tuple, so no hypothetical placement leaks into
a sibling branch or back into the caller's board.
"""
from functools import lru_cache
from typing import List, Optional, Sequence

from .errors import InvalidStateError
from .game_basics import EMPTY, GameResult, Player, evaluate

WIN_SCORE = 10


def _as_tuple(board: Sequence[str]) -> tuple:
    return tuple(v.value if isinstance(v, Player) else v for v in board)


def legal_moves_t(board_t: tuple) -> List[int]:
    return [i for i, v in enumerate(board_t) if v == EMPTY]


def apply_move_t(board_t: tuple, idx: int, player: str) -> tuple:
    lst = list(board_t)
    lst[idx] = player
    return tuple(lst)


@lru_cache(maxsize=None)
def _minimax_t(board_t: tuple, depth: int, maximizing: bool, computer: str) -> int:
    result = evaluate(board_t)
    if result.status == GameResult.WIN:
        if result.winner == computer:
            return WIN_SCORE - depth
        return depth - WIN_SCORE
    if result.status == GameResult.DRAW:
        return 0

    if maximizing:
        best = -float("inf")
        for mv in legal_moves_t(board_t):
            score = _minimax_t(apply_move_t(board_t, mv, computer), depth + 1, False, computer)
            best = max(best, score)
        return int(best)

    opponent = Player(computer).opponent().value
    best = float("inf")
    for mv in legal_moves_t(board_t):
        score = _minimax_t(apply_move_t(board_t, mv, opponent), depth + 1, True, computer)
        best = min(best, score)
    return int(best)


def minimax(board: Sequence[str], depth: int, maximizing: bool, computer: Player = Player.O) -> int:
    return _minimax_t(_as_tuple(board), depth, maximizing, Player(computer).value)


def move_scores(board: Sequence[str], computer: Player = Player.O) -> List[Optional[int]]:
    """Top-level minimax score of each cell; None for occupied cells."""
    board_t = _as_tuple(board)
    me = Player(computer).value
    scores: List[Optional[int]] = [None] * 9
    for mv in legal_moves_t(board_t):
        scores[mv] = _minimax_t(apply_move_t(board_t, mv, me), 0, False, me)
    return scores


def best_move(board: Sequence[str], computer: Player = Player.O) -> int:
    scores = move_scores(board, computer)
    best_score: Optional[int] = None
    move: Optional[int] = None
    for i, score in enumerate(scores):
        if score is None:
            continue
        if best_score is None or score > best_score:
            best_score = score
            move = i
    if move is None:
        raise InvalidStateError(f"No empty cell to move to on board {list(board)!r}")
    return move


def clear_cache() -> None:
    _minimax_t.cache_clear()
