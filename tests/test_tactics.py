from ttt_engine.game_basics import Player
from ttt_engine.tactics import (
    completing_move,
    fork_moves,
    gives_opponent_immediate_win,
    immediate_winning_moves,
)


def test_completing_move_first_line_in_table_order():
    # X can finish row (0,1,2) at 2 and column (0,3,6) at 6; the row is scanned first
    board = ["X", "X", "", "X", "O", "", "", "O", ""]
    assert completing_move(board, "X") == 2
    assert immediate_winning_moves(board, "X") == [2, 6]


def test_completing_move_needs_an_empty_third_cell():
    board = ["X", "X", "O", "", "O", "", "", "", ""]
    assert completing_move(board, "X") is None
    assert completing_move(board, "O") == 6


def test_fork_moves():
    # X on opposite corners, O in the centre
    board = ["X", "", "", "", "O", "", "", "", "X"]
    assert fork_moves(board, "X") == [2, 6]
    assert fork_moves(["", "", "", "", "", "", "", "", ""], "X") == []


def test_gives_opponent_immediate_win():
    board = ["O", "O", "", "X", "", "", "X", "", ""]
    # X must take 2; anything else lets O complete the row
    assert not gives_opponent_immediate_win(board, Player.X, 2)
    assert gives_opponent_immediate_win(board, Player.X, 4)
    # occupied cell is not a move at all
    assert not gives_opponent_immediate_win(board, Player.X, 0)
