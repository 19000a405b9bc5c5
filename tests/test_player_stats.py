from __future__ import annotations

from conftest import play
from score_api.models import BallInput, WicketType
from score_api.player_stats import player_aggregate_stats
from score_api.scoring import create_match, select_participants, start_match


def _match(match_id, roster, balls):
    state = start_match(create_match(match_id, "t1", "lions", "tigers"))
    state = select_participants(state, "a1", "a2", "b1", roster)
    return play(state, balls, roster)


def test_batting_and_bowling_lines(roster):
    m1 = _match("m1", roster, [BallInput(runs=4), BallInput(runs=6), BallInput(wicket=WicketType.BOWLED)])
    m2 = _match("m2", roster, [BallInput(runs=2), BallInput(runs=2)])

    a1 = player_aggregate_stats("a1", [m1, m2])
    assert (a1.innings_bat, a1.runs, a1.balls, a1.dismissals, a1.highest) == (2, 14, 5, 1, 10)
    assert a1.average == 14.0
    assert round(a1.strike_rate, 2) == 280.0

    b1 = player_aggregate_stats("b1", [m1, m2])
    assert (b1.innings_bowl, b1.wickets, b1.runs_conceded, b1.balls_bowled) == (2, 1, 14, 5)
    assert round(b1.economy, 2) == 16.8


def test_never_dismissed_average_is_runs(roster):
    m = _match("m1", roster, [BallInput(runs=3)])
    assert player_aggregate_stats("a1", [m]).average == 3.0


def test_unknown_player(roster):
    agg = player_aggregate_stats("zz", [_match("m1", roster, [BallInput(runs=1)])])
    assert agg.to_dict()["strike_rate"] == 0.0
    assert agg.innings_bat == 0
