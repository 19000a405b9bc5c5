from __future__ import annotations

import pytest

from conftest import dots, make_team, play
from score_api.models import TIED, BallInput, ExtraType, MatchStatus, Phase, WhoOut, WicketType
from score_api.phase import decide_winner
from score_api.roster import Roster, squad_size
from score_api.scoring import (
    CommandStateError,
    SelectionError,
    create_match,
    end_innings,
    record_ball,
    select_participants,
    start_match,
    start_second_innings,
)


def _short_match(roster, total_overs=1, max_wickets=2):
    state = start_match(create_match("m2", "t1", "lions", "tigers", total_overs=total_overs, max_wickets=max_wickets))
    return select_participants(state, "a1", "a2", "b1", roster)


def _chasing(roster, first_innings_balls, total_overs=1, max_wickets=2):
    state = play(_short_match(roster, total_overs, max_wickets), first_innings_balls, roster)
    if state.phase == Phase.FIRST_INNINGS:
        state = end_innings(state)
    state = start_second_innings(state)
    return select_participants(state, "b1", "b2", "a1", roster)


class TestFirstInnings:
    def test_all_out_goes_to_innings_break(self, roster):
        state = _short_match(roster, total_overs=5, max_wickets=2)
        state = record_ball(state, BallInput(wicket=WicketType.BOWLED), roster)
        state = select_participants(state, striker_id="a3", roster=roster)
        state = record_ball(state, BallInput(wicket=WicketType.LBW), roster)

        assert state.phase == Phase.INNINGS_BREAK
        assert state.status == MatchStatus.LIVE
        assert state.score_a.is_declared
        assert state.live.striker_id == state.live.non_striker_id == state.live.bowler_id == ""

    def test_overs_exhausted(self, roster):
        state = play(_short_match(roster), dots(5) + [BallInput(runs=4)], roster)
        assert state.phase == Phase.INNINGS_BREAK
        assert state.score_a.runs == 4
        assert state.score_a.balls == 6

    def test_no_balls_during_break(self, roster):
        state = play(_short_match(roster), dots(6), roster)
        with pytest.raises(CommandStateError):
            select_participants(state, "a1", "a2", "b1", roster)

    def test_break_is_not_auto_advanced(self, roster):
        state = play(_short_match(roster), dots(6), roster)
        assert state.phase == Phase.INNINGS_BREAK
        state = start_second_innings(state)
        assert state.phase == Phase.SECOND_INNINGS
        assert state.batting_team_id() == "tigers"

    def test_single_batter_format(self):
        solo = Roster([make_team("lions", "a", size=1), make_team("tigers", "b")])
        state = start_match(create_match("m3", "t1", "lions", "tigers", total_overs=2, max_wickets=1))
        assert squad_size(state.max_wickets) == len(solo.get_team("lions").players) == 1
        state = select_participants(state, striker_id="a1", bowler_id="b1", roster=solo)

        state = record_ball(state, BallInput(runs=1), solo)
        assert (state.live.striker_id, state.live.non_striker_id) == ("a1", "")

        state = play(state, dots(5), solo)
        assert state.live.striker_id == "a1"
        assert state.live.bowler_id == ""

        state = select_participants(state, bowler_id="b2", roster=solo)
        with pytest.raises(SelectionError):
            record_ball(state, BallInput(wicket=WicketType.RUN_OUT, who_out=WhoOut.NON_STRIKER, fielder_id="b3"), solo)

        state = record_ball(state, BallInput(wicket=WicketType.BOWLED), solo)
        assert state.phase == Phase.INNINGS_BREAK
        assert state.score_a.runs == 1
        assert state.score_a.wickets == 1


class TestChase:
    def test_target_reached_mid_over(self, roster):
        state = create_match("m4", "t1", "lions", "tigers", total_overs=20)
        state.status = MatchStatus.LIVE
        state.phase = Phase.SECOND_INNINGS
        state.score_a.runs = 149
        state.score_a.is_declared = True
        state.score_b.runs = 149
        state.score_b.wickets = 3
        state.score_b.balls = 110  # 18.2 overs
        state = select_participants(state, "b4", "b5", "a6", roster)

        state = record_ball(state, BallInput(runs=1), roster)

        assert state.status == MatchStatus.COMPLETED
        assert state.phase == Phase.COMPLETE
        assert state.winner_id == "tigers"
        assert state.score_b.overs == 18.3
        assert state.live.striker_id == ""

    def test_won_off_a_wide(self, roster):
        state = _chasing(roster, [BallInput(runs=2)] + dots(5))
        state = record_ball(state, BallInput(runs=2), roster)
        assert state.status == MatchStatus.LIVE
        state = record_ball(state, BallInput(extra=ExtraType.WIDE), roster)
        assert state.winner_id == "tigers"
        assert state.score_b.balls == 1

    def test_defended(self, roster):
        state = _chasing(roster, [BallInput(runs=6)] + dots(5))
        state = play(state, [BallInput(runs=4)] + dots(5), roster)
        assert state.status == MatchStatus.COMPLETED
        assert state.winner_id == "lions"

    def test_tie_on_last_ball(self, roster):
        state = _chasing(roster, [BallInput(runs=4)] + dots(5))
        state = play(state, dots(5) + [BallInput(runs=4)], roster)
        assert state.status == MatchStatus.COMPLETED
        assert state.winner_id == TIED

    def test_chasing_side_all_out(self, roster):
        state = _chasing(roster, [BallInput(runs=4)] + dots(5))
        state = record_ball(state, BallInput(runs=2), roster)
        state = record_ball(state, BallInput(wicket=WicketType.BOWLED), roster)
        state = select_participants(state, striker_id="b3", roster=roster)
        state = record_ball(state, BallInput(wicket=WicketType.STUMPED), roster)
        assert state.winner_id == "lions"
        assert state.score_b.balls == 3


def test_decide_winner(scheduled_match):
    scheduled_match.score_a.runs = 120
    scheduled_match.score_b.runs = 121
    assert decide_winner(scheduled_match) == "tigers"
    scheduled_match.score_b.runs = 100
    assert decide_winner(scheduled_match) == "lions"
    scheduled_match.score_b.runs = 120
    assert decide_winner(scheduled_match) == TIED
