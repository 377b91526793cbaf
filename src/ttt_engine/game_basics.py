"""
Game basics: board representation, serialization, rules, winner/draw checks, validity.
Notes:
- A board is a list of 9 cells: "" = empty, "X", "O". Indices are row-major.
- A "ply" is a half-move (one player's turn).
- Reachable boards have piece counts that differ by at most one, the first
  mover holding the extra piece.
- When two lines are complete (only possible on hand-made boards), the first
  line in WINNING_LINES order decides the result.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import BoardFormatError

EMPTY = ""

Board = List[str]
Line = Tuple[int, int, int]

WINNING_LINES: Tuple[Line, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),             # diagonals
)

EMPTY_CHARS = ".-_"


class Player(str, Enum):
    X = "X"
    O = "O"

    def opponent(self) -> "Player":
        return Player.O if self is Player.X else Player.X


@dataclass(frozen=True)
class GameResult:
    """Outcome of a board: a win for one player, a draw, or a game in progress.

    ``line`` holds the completed line on a win so a front end can highlight it.
    """

    status: str
    winner: Optional[Player] = None
    line: Optional[Line] = None

    WIN = "win"
    DRAW = "draw"
    IN_PROGRESS = "in_progress"

    @classmethod
    def win(cls, player: Player, line: Line) -> "GameResult":
        return cls(cls.WIN, Player(player), tuple(line))

    @classmethod
    def draw(cls) -> "GameResult":
        return cls(cls.DRAW)

    @classmethod
    def in_progress(cls) -> "GameResult":
        return cls(cls.IN_PROGRESS)

    @property
    def is_win(self) -> bool:
        return self.status == self.WIN

    @property
    def is_draw(self) -> bool:
        return self.status == self.DRAW

    @property
    def is_over(self) -> bool:
        return self.status != self.IN_PROGRESS


def empty_board() -> Board:
    return [EMPTY] * 9


def serialize_board(board: Sequence[str]) -> str:
    return ''.join(cell if cell else '.' for cell in board)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip().upper()
    if len(raw) != 9:
        raise BoardFormatError(f"Board string must have 9 cells, got {len(raw)}: {board_str!r}")
    board: Board = []
    for ch in raw:
        if ch in EMPTY_CHARS:
            board.append(EMPTY)
        elif ch in ("X", "O"):
            board.append(ch)
        else:
            raise BoardFormatError(f"Invalid cell {ch!r} in board {board_str!r}; use X, O or '.'")
    return board


def legal_moves(board: Sequence[str]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def is_full(board: Sequence[str]) -> bool:
    return EMPTY not in board


def apply_move(board: Sequence[str], index: int, player: str) -> Board:
    b = list(board)
    b[index] = player
    return b


def winning_line(board: Sequence[str]) -> Optional[Line]:
    for line in WINNING_LINES:
        a, b, c = line
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return line
    return None


def get_winner(board: Sequence[str]) -> Optional[Player]:
    line = winning_line(board)
    return Player(board[line[0]]) if line is not None else None


def is_draw(board: Sequence[str]) -> bool:
    return is_full(board) and winning_line(board) is None


def evaluate(board: Sequence[str]) -> GameResult:
    """Classify ``board`` without touching it."""
    line = winning_line(board)
    if line is not None:
        return GameResult.win(Player(board[line[0]]), line)
    if is_full(board):
        return GameResult.draw()
    return GameResult.in_progress()


def get_piece_counts(board: Sequence[str]) -> Tuple[int, int]:
    return board.count(Player.X.value), board.count(Player.O.value)


def current_player(board: Sequence[str], first: Player = Player.X) -> Player:
    x, o = get_piece_counts(board)
    first = Player(first)
    if x == o:
        return first
    return first.opponent()


def is_valid_state(board: Sequence[str], first: Optional[Player] = None) -> bool:
    """Whether ``board`` can arise from legal alternating play.

    With ``first=None`` either player may have opened the game.
    """
    if len(board) != 9 or any(v not in (EMPTY, "X", "O") for v in board):
        return False
    x_count, o_count = get_piece_counts(board)
    starters = [Player(first)] if first is not None else [Player.X, Player.O]
    return any(_valid_for_starter(board, x_count, o_count, s) for s in starters)


def _valid_for_starter(board: Sequence[str], x_count: int, o_count: int, first: Player) -> bool:
    first_count, second_count = (x_count, o_count) if first is Player.X else (o_count, x_count)
    if first_count not in (second_count, second_count + 1):
        return False

    # no double winners
    def count_wins(p: str) -> int:
        return sum(1 for line in WINNING_LINES if all(board[i] == p for i in line))
    x_wins, o_wins = count_wins("X"), count_wins("O")
    if x_wins > 0 and o_wins > 0:
        return False
    w = get_winner(board)
    if w is None:
        return True
    # the winner made the last move
    if w is first:
        return first_count == second_count + 1
    return first_count == second_count
