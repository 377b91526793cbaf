import pytest

from ttt_engine.arena import play_game, run_matches
from ttt_engine.game_basics import Player, evaluate
from ttt_engine.move_selector import Difficulty


def test_hard_vs_hard_is_always_a_draw():
    summary = run_matches(Difficulty.HARD, Difficulty.HARD, games=3, seed=0)
    assert summary.draws == 3
    # fully deterministic: same move list every time
    assert len({tuple(r.moves) for r in summary.records}) == 1


@pytest.mark.parametrize("opponent", [Difficulty.EASY, Difficulty.MEDIUM])
def test_hard_never_loses_as_o(opponent):
    summary = run_matches(opponent, Difficulty.HARD, games=60, seed=11)
    assert summary.x_wins == 0
    assert summary.games == 60


@pytest.mark.parametrize("opponent", [Difficulty.EASY, Difficulty.MEDIUM])
def test_hard_never_loses_as_x(opponent):
    summary = run_matches(Difficulty.HARD, opponent, games=60, seed=5)
    assert summary.o_wins == 0


def test_hard_never_loses_when_o_opens():
    summary = run_matches(Difficulty.EASY, Difficulty.HARD, games=40, seed=3, first=Player.O)
    assert summary.x_wins == 0
    for rec in summary.records:
        assert len(rec.moves) >= 3


def test_play_game_record_is_consistent():
    rec = play_game(Difficulty.EASY, Difficulty.MEDIUM)
    assert rec.result.is_over
    assert len(set(rec.moves)) == len(rec.moves)
    # replay the moves and evaluate the final board again
    board = [""] * 9
    player = Player.X
    for mv in rec.moves:
        board[mv] = player.value
        player = player.opponent()
    assert evaluate(board) == rec.result


def test_summary_metrics_add_up():
    summary = run_matches(Difficulty.EASY, Difficulty.EASY, games=50, seed=42)
    assert summary.x_wins + summary.o_wins + summary.draws == 50
    m = summary.as_metrics()
    assert m["x_win_rate"] + m["o_win_rate"] + m["draw_rate"] == pytest.approx(1.0)


def test_run_matches_reproducible_with_seed():
    a = run_matches(Difficulty.EASY, Difficulty.MEDIUM, games=20, seed=9)
    b = run_matches(Difficulty.EASY, Difficulty.MEDIUM, games=20, seed=9)
    assert [r.moves for r in a.records] == [r.moves for r in b.records]
