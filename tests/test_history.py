from __future__ import annotations

import json

from conftest import dots, play
from score_api.history import push_snapshot, undo
from score_api.models import BallInput, ExtraType, MatchState, Phase, WicketType
from score_api.scoring import end_innings, record_ball, select_participants


def _without_history(state: MatchState) -> dict:
    return state.to_dict(include_history=False)


class TestUndo:
    def test_empty_stack_is_noop(self, live_match):
        assert undo(live_match) is live_match

    def test_single_ball(self, live_match, roster):
        state = record_ball(live_match, BallInput(runs=4), roster)
        restored = undo(state)
        assert _without_history(restored) == _without_history(live_match)
        assert restored.history == []

    def test_n_balls_then_n_undos(self, live_match, roster):
        balls = [
            BallInput(runs=1),
            BallInput(runs=2, extra=ExtraType.NO_BALL),
            BallInput(wicket=WicketType.CAUGHT, fielder_id="b9"),
        ]
        state = play(live_match, balls, roster)
        state = select_participants(state, striker_id="a3", roster=roster)
        state = play(state, dots(4), roster)

        for _ in range(7):
            state = undo(state)

        assert _without_history(state) == _without_history(live_match)

    def test_undo_restores_phase(self, live_match, roster):
        state = end_innings(live_match)
        assert state.phase == Phase.INNINGS_BREAK
        assert undo(state).phase == Phase.FIRST_INNINGS

    def test_restores_cleared_bowler_after_over(self, live_match, roster):
        state = play(live_match, dots(6), roster)
        assert state.live.bowler_id == ""
        state = undo(state)
        assert state.live.bowler_id == "b1"
        assert state.current_over_balls == 5
        assert state.scorecard.B.find_bowler("b1").maidens == 0

    def test_snapshot_independent_of_later_mutation(self, live_match, roster):
        state = record_ball(live_match, BallInput(runs=6), roster)
        state.scorecard.A.batting[0].runs = 999
        restored = undo(state)
        assert restored.scorecard.A.find_batter("a1") is None


class TestHistoryCap:
    def test_oldest_evicted(self, live_match):
        state = live_match
        for i in range(60):
            state.score_a.runs = i
            push_snapshot(state)

        assert len(state.history) == 50
        assert json.loads(state.history[0])["score_a"]["runs"] == 10

        undos = 0
        while state.history:
            state = undo(state)
            undos += 1
        assert undos == 50
        assert state.score_a.runs == 10

    def test_snapshot_excludes_history(self, live_match):
        push_snapshot(live_match)
        push_snapshot(live_match)
        assert "history" not in json.loads(live_match.history[1])

    def test_custom_limit(self, live_match):
        for _ in range(5):
            push_snapshot(live_match, limit=3)
        assert len(live_match.history) == 3
