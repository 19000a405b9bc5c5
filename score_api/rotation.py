# score_api/rotation.py
from __future__ import annotations

from score_api.models import BallInput, LiveParticipants, MatchState, WicketType
from score_api.outcome import BallOutcome
from score_api.overs import is_over_complete
from score_api.roster import squad_size
from score_api.stats import dismissed_is_non_striker


def next_participants(state: MatchState, ball: BallInput, outcome: BallOutcome) -> LiveParticipants:
    """
    Striker / non-striker / bowler after the ball, in order:

    1. dismissed batter's slot is cleared (caller must refill before the next ball)
    2. odd effective runs swap ends (wide runs included)
    3. a completed over swaps ends again and clears the bowler

    A lone batter (single-wicket format) never changes ends.

    Expects the innings score to already include this ball.
    """
    live = state.live
    striker = live.striker_id
    non_striker = live.non_striker_id
    bowler = live.bowler_id

    if ball.wicket != WicketType.NONE:
        if dismissed_is_non_striker(ball):
            non_striker = ""
        else:
            striker = ""

    lone_batter = squad_size(state.max_wickets) == 1

    if outcome.effective_runs % 2 == 1 and not lone_batter:
        striker, non_striker = non_striker, striker

    if outcome.legal_ball_increment == 1 and is_over_complete(state.current_score().balls):
        if not lone_batter:
            striker, non_striker = non_striker, striker
        bowler = ""

    return participants_with_names(state, striker, non_striker, bowler)


def participants_with_names(state: MatchState, striker: str, non_striker: str, bowler: str) -> LiveParticipants:
    """Names come from the current live block, else from the scorecard entries."""
    bat_card = state.batting_card()
    bowl_card = state.bowling_card()
    live = state.live
    known = {
        live.striker_id: live.striker_name,
        live.non_striker_id: live.non_striker_name,
    }

    def _bat_name(pid: str) -> str:
        if not pid:
            return ""
        if known.get(pid):
            return known[pid]
        stats = bat_card.find_batter(pid)
        return stats.player_name if stats else ""

    def _bowl_name(pid: str) -> str:
        if not pid:
            return ""
        if pid == live.bowler_id and live.bowler_name:
            return live.bowler_name
        stats = bowl_card.find_bowler(pid)
        return stats.player_name if stats else ""

    return LiveParticipants(
        striker_id=striker,
        striker_name=_bat_name(striker),
        non_striker_id=non_striker,
        non_striker_name=_bat_name(non_striker),
        bowler_id=bowler,
        bowler_name=_bowl_name(bowler),
    )


def apply_rotation(state: MatchState, ball: BallInput, outcome: BallOutcome) -> None:
    state.live = next_participants(state, ball, outcome)
    if outcome.legal_ball_increment == 1 and is_over_complete(state.current_score().balls):
        state.current_over_runs = 0
        state.current_over_balls = 0
