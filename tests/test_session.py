import numpy as np
import pytest

from ttt_engine.errors import InvalidMoveError
from ttt_engine.game_basics import GameResult, Player
from ttt_engine.session import GameSession, Scoreboard
from ttt_engine.settings import SessionConfig


def pvp() -> GameSession:
    return GameSession(SessionConfig(mode="pvp"))


def test_turns_alternate_and_only_target_cell_changes():
    s = pvp()
    s.play(4)
    assert s.board == ["", "", "", "", "X", "", "", "", ""]
    assert s.current_player is Player.O
    s.play(0)
    assert s.board == ["O", "", "", "", "X", "", "", "", ""]
    assert s.current_player is Player.X


def test_occupied_cell_is_rejected_without_state_change():
    s = pvp()
    s.play(4)
    before = list(s.board)
    with pytest.raises(InvalidMoveError):
        s.play(4)
    assert s.board == before
    assert s.current_player is Player.O


@pytest.mark.parametrize("idx", [-1, 9])
def test_out_of_range_cell_is_rejected(idx):
    s = pvp()
    with pytest.raises(InvalidMoveError):
        s.play(idx)
    assert s.board == [""] * 9


def test_win_ends_game_and_records_score():
    s = pvp()
    for idx in (0, 3, 1, 4):
        assert s.play(idx) == GameResult.in_progress()
    res = s.play(2)
    assert res.is_win and res.winner is Player.X and res.line == (0, 1, 2)
    assert not s.active
    assert s.scores == Scoreboard(x=1, o=0, draws=0)
    with pytest.raises(InvalidMoveError):
        s.play(8)


def test_draw_records_draw():
    s = pvp()
    for idx in (0, 1, 2, 4, 3, 5, 7, 6):
        s.play(idx)
    res = s.play(8)
    assert res.is_draw
    assert s.scores.draws == 1
    assert not s.active


def test_restart_resets_board_and_keeps_scores():
    s = pvp()
    for idx in (0, 3, 1, 4, 2):
        s.play(idx)
    assert not s.active
    s.restart()
    assert s.board == [""] * 9
    assert s.active
    assert s.current_player is Player.X
    assert s.result == GameResult.in_progress()
    assert s.scores.x == 1


def test_restart_mid_game_reactivates():
    s = pvp()
    s.play(0)
    s.restart()
    assert s.board == [""] * 9 and s.active


def test_restart_uses_configured_first_player():
    s = GameSession(SessionConfig(mode="pvp", first_player="O"))
    assert s.current_player is Player.O
    s.play(4)
    s.restart()
    assert s.current_player is Player.O


def test_human_move_rejected_while_computer_to_play():
    s = GameSession(SessionConfig(mode="pvc", difficulty="hard"))
    s.play(0)
    assert s.is_computer_turn
    # second click during the presentation delay
    with pytest.raises(InvalidMoveError):
        s.play(1)
    assert s.board == ["X", "", "", "", "", "", "", "", ""]
    mv = s.computer_move()
    assert mv == 4
    assert s.board[4] == "O"
    assert s.current_player is Player.X
    assert not s.is_computer_turn


def test_computer_move_refused_on_human_turn():
    s = GameSession(SessionConfig(mode="pvc"))
    with pytest.raises(InvalidMoveError):
        s.computer_move()


def test_computer_moves_first_after_restart_when_configured():
    s = GameSession(SessionConfig(mode="pvc", first_player="O", difficulty="easy"),
                    rng=np.random.default_rng(0))
    assert s.is_computer_turn
    s.computer_move()
    assert s.board.count("O") == 1
    s.restart()
    assert s.is_computer_turn
    assert s.board == [""] * 9


def test_pvp_never_has_computer_turn():
    s = pvp()
    s.play(0)
    assert not s.is_computer_turn


def test_hard_computer_never_loses_a_scripted_game():
    s = GameSession(SessionConfig(mode="pvc", difficulty="hard"))
    # human keeps taking the lowest free cell
    while s.active:
        if s.is_computer_turn:
            s.computer_move()
        else:
            s.play(s.board.index(""))
    assert s.scores.x == 0
