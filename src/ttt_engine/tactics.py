"""
Tactics and simple motifs: completing lines, immediate wins/blocks, forks, safety checks.
Notes:
- completing_move scans WINNING_LINES in table order, so the first qualifying
  line decides when several are open at once.
"""
from typing import List, Optional, Sequence

from .game_basics import EMPTY, WINNING_LINES, Player, get_winner


def completing_move(board: Sequence[str], player: str) -> Optional[int]:
    for line in WINNING_LINES:
        vals = [board[i] for i in line]
        if vals.count(player) == 2 and EMPTY in vals:
            return line[vals.index(EMPTY)]
    return None


def immediate_winning_moves(board: Sequence[str], player: str) -> List[int]:
    wins: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        b = list(board)
        b[i] = player
        if get_winner(b) == player:
            wins.append(i)
    return wins


def fork_moves(board: Sequence[str], player: str) -> List[int]:
    forks: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        b = list(board)
        b[i] = player
        if len(immediate_winning_moves(b, player)) >= 2:
            forks.append(i)
    return forks


def gives_opponent_immediate_win(board: Sequence[str], player: str, move: int) -> bool:
    if board[move] != EMPTY:
        return False
    opp = Player(player).opponent()
    b = list(board)
    b[move] = player
    return len(immediate_winning_moves(b, opp)) > 0
