# score_api/phase.py
from __future__ import annotations

import logging
from typing import Optional

from score_api.models import TIED, LiveParticipants, MatchState, MatchStatus, Phase
from score_api.overs import BALLS_PER_OVER

logger = logging.getLogger(__name__)


def decide_winner(state: MatchState) -> str:
    """Higher runs wins; equal runs is a tie."""
    if state.score_b.runs > state.score_a.runs:
        return state.team_b_id
    if state.score_a.runs > state.score_b.runs:
        return state.team_a_id
    return TIED


def innings_exhausted(state: MatchState) -> bool:
    score = state.current_score()
    return score.wickets >= state.max_wickets or score.balls == state.total_overs * BALLS_PER_OVER


def complete_match(state: MatchState, winner_id: Optional[str]) -> None:
    state.status = MatchStatus.COMPLETED
    state.phase = Phase.COMPLETE
    state.winner_id = winner_id
    state.live = LiveParticipants()
    logger.info("Match %s completed, winner=%s (%s v %s)", state.id, winner_id, _line(state, "A"), _line(state, "B"))


def close_first_innings(state: MatchState) -> None:
    state.score_a.is_declared = True
    state.phase = Phase.INNINGS_BREAK
    state.live = LiveParticipants()
    logger.info("Match %s first innings closed at %s", state.id, _line(state, "A"))


def evaluate_after_ball(state: MatchState) -> None:
    """
    Innings / match completion after a ball has been applied.

    Second innings: reaching the target wins immediately, whatever is left.
    Otherwise all-out or overs exhausted ends the innings (first) or match (second).
    """
    if state.phase == Phase.SECOND_INNINGS:
        if state.score_b.runs >= state.target:
            complete_match(state, state.team_b_id)
        elif innings_exhausted(state):
            complete_match(state, decide_winner(state))
        return

    if state.phase == Phase.FIRST_INNINGS and innings_exhausted(state):
        close_first_innings(state)


def _line(state: MatchState, side: str) -> str:
    score = state.score_a if side == "A" else state.score_b
    return f"{score.runs}/{score.wickets} ({score.overs})"
