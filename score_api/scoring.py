# score_api/scoring.py
from __future__ import annotations

import copy
import logging
from typing import Optional

from score_api.config import DEFAULT_MAX_WICKETS, DEFAULT_TOTAL_OVERS
from score_api.history import push_snapshot, undo as _undo_snapshot
from score_api.models import (
    FIELDER_REQUIRED,
    VALID_RUN_VALUES,
    BallInput,
    LiveParticipants,
    MatchState,
    MatchStatus,
    Phase,
    WhoOut,
    WicketType,
)
from score_api.outcome import resolve_ball
from score_api.phase import close_first_innings, complete_match, decide_winner, evaluate_after_ball
from score_api.roster import Roster, player_name, squad_size
from score_api.rotation import apply_rotation
from score_api.stats import apply_ball_stats

logger = logging.getLogger(__name__)

ACTIVE_PHASES = (Phase.FIRST_INNINGS, Phase.SECOND_INNINGS)


class ScoringError(ValueError):
    """Base class for rejected scoring commands. Nothing is mutated when raised."""
    pass


class SelectionError(ScoringError):
    """Missing/invalid striker, non-striker, bowler, fielder or ball payload."""
    pass


class CommandStateError(ScoringError):
    """Command not allowed in the match's current status/phase."""
    pass


# -----------------------------
# Guards
# -----------------------------
def _require_live_innings(state: MatchState) -> None:
    if state.status != MatchStatus.LIVE:
        raise CommandStateError(f"Match {state.id} is not live (status={state.status.value})")
    if state.phase not in ACTIVE_PHASES:
        raise CommandStateError(f"No innings in progress (phase={state.phase.value})")


def validate_ball(state: MatchState, ball: BallInput) -> None:
    _require_live_innings(state)

    live = state.live
    if not live.striker_id or not live.bowler_id:
        raise SelectionError("Select a striker and a bowler first")
    lone_batter = squad_size(state.max_wickets) == 1
    if not live.non_striker_id and not lone_batter:
        raise SelectionError("Select a non-striker")
    if live.striker_id == live.non_striker_id:
        raise SelectionError("Striker and non-striker cannot be the same player")

    if ball.runs not in VALID_RUN_VALUES:
        raise SelectionError(f"Invalid run value: {ball.runs} (allowed: {VALID_RUN_VALUES})")
    if ball.wicket in FIELDER_REQUIRED and not ball.fielder_id:
        raise SelectionError(f"A fielder is required for {ball.wicket.value}")
    if ball.wicket == WicketType.RUN_OUT and ball.who_out == WhoOut.NON_STRIKER and not live.non_striker_id:
        raise SelectionError("There is no non-striker to run out")


# -----------------------------
# Lifecycle commands
# -----------------------------
def create_match(
    match_id: str,
    tournament_id: str,
    team_a_id: str,
    team_b_id: str,
    total_overs: int = DEFAULT_TOTAL_OVERS,
    max_wickets: int = DEFAULT_MAX_WICKETS,
    *,
    venue: str = "Main Ground",
    date: str = "",
    time: str = "",
    match_type: str = "League",
) -> MatchState:
    if team_a_id == team_b_id:
        raise SelectionError("team_a and team_b must be different")
    if total_overs <= 0:
        raise SelectionError("total_overs must be positive")
    if max_wickets <= 0:
        raise SelectionError("max_wickets must be positive")

    return MatchState(
        id=match_id,
        tournament_id=tournament_id,
        team_a_id=team_a_id,
        team_b_id=team_b_id,
        total_overs=total_overs,
        max_wickets=max_wickets,
        venue=venue,
        date=date,
        time=time,
        match_type=match_type,
    )


def start_match(state: MatchState) -> MatchState:
    if state.status != MatchStatus.SCHEDULED:
        raise CommandStateError(f"Only a scheduled match can start (status={state.status.value})")

    updated = copy.deepcopy(state)
    updated.status = MatchStatus.LIVE
    updated.phase = Phase.FIRST_INNINGS
    logger.info("Match %s started: %s bats first", updated.id, updated.team_a_id)
    return updated


def abandon_match(state: MatchState) -> MatchState:
    if state.status not in (MatchStatus.SCHEDULED, MatchStatus.LIVE):
        raise CommandStateError(f"Cannot abandon a {state.status.value} match")

    updated = copy.deepcopy(state)
    updated.status = MatchStatus.ABANDONED
    updated.phase = Phase.ABANDONED
    updated.live = LiveParticipants()
    logger.info("Match %s abandoned", updated.id)
    return updated


def swap_batting_first(state: MatchState) -> MatchState:
    """Swap which team bats first. Scores stay where they are; only identities move."""
    if state.status not in (MatchStatus.SCHEDULED, MatchStatus.LIVE) or state.phase != Phase.FIRST_INNINGS:
        raise CommandStateError("Batting order can only change before the first innings is under way")
    if state.score_a.balls > 0:
        raise CommandStateError("Batting order is locked once a legal ball has been bowled")

    updated = copy.deepcopy(state)
    updated.team_a_id, updated.team_b_id = updated.team_b_id, updated.team_a_id
    updated.current_over_runs = 0
    updated.current_over_balls = 0
    updated.live = LiveParticipants()
    logger.info("Match %s batting order swapped: %s now bats first", updated.id, updated.team_a_id)
    return updated


def end_innings(state: MatchState) -> MatchState:
    """
    Force-close the current innings.

    First innings -> declared, innings break.
    Second innings -> declared, match completed on current runs (may be a tie).
    """
    _require_live_innings(state)

    updated = copy.deepcopy(state)
    push_snapshot(updated)

    if updated.phase == Phase.FIRST_INNINGS:
        close_first_innings(updated)
    else:
        updated.score_b.is_declared = True
        complete_match(updated, decide_winner(updated))
    return updated


def start_second_innings(state: MatchState) -> MatchState:
    if state.status != MatchStatus.LIVE or state.phase != Phase.INNINGS_BREAK:
        raise CommandStateError("Second innings can only start during the innings break")

    updated = copy.deepcopy(state)
    updated.phase = Phase.SECOND_INNINGS
    updated.current_over_runs = 0
    updated.current_over_balls = 0
    updated.live = LiveParticipants()
    logger.info("Match %s second innings started, target %d", updated.id, updated.target)
    return updated


def reopen_match(state: MatchState) -> MatchState:
    """Undo a result: back to a live second innings with no winner."""
    if state.status != MatchStatus.COMPLETED:
        raise CommandStateError("Only a completed match can be re-opened")

    updated = copy.deepcopy(state)
    push_snapshot(updated)
    updated.status = MatchStatus.LIVE
    updated.phase = Phase.SECOND_INNINGS
    updated.winner_id = None
    updated.score_b.is_declared = False
    logger.info("Match %s re-opened", updated.id)
    return updated


def set_man_of_the_match(state: MatchState, player_id: str) -> MatchState:
    if state.status != MatchStatus.COMPLETED:
        raise CommandStateError("Man of the match can only be set after completion")
    if not player_id:
        raise SelectionError("player_id is required")

    updated = copy.deepcopy(state)
    updated.man_of_the_match = player_id
    return updated


def select_participants(
    state: MatchState,
    striker_id: Optional[str] = None,
    non_striker_id: Optional[str] = None,
    bowler_id: Optional[str] = None,
    roster: Optional[Roster] = None,
) -> MatchState:
    """
    Update the live striker / non-striker / bowler. None leaves a slot as is,
    "" clears it. Scores and history are untouched.
    """
    _require_live_innings(state)

    live = state.live
    striker = live.striker_id if striker_id is None else striker_id
    non_striker = live.non_striker_id if non_striker_id is None else non_striker_id
    bowler = live.bowler_id if bowler_id is None else bowler_id

    if striker and striker == non_striker:
        raise SelectionError("Striker and non-striker cannot be the same player")

    bat_card = state.batting_card()
    for pid in (striker, non_striker):
        stats = bat_card.find_batter(pid) if pid else None
        if stats is not None and stats.is_out:
            raise SelectionError(f"Player {pid} is already out")

    bat_team = state.batting_team_id()
    bowl_team = state.bowling_team_id()

    # Players already in a slot keep their name, even when they change ends.
    batters_known = {live.striker_id: live.striker_name, live.non_striker_id: live.non_striker_name}
    bowlers_known = {live.bowler_id: live.bowler_name}

    def _name(team_id: str, pid: str, known: dict) -> str:
        if not pid:
            return ""
        return known.get(pid) or player_name(roster, team_id, pid)

    updated = copy.deepcopy(state)
    updated.live = LiveParticipants(
        striker_id=striker,
        striker_name=_name(bat_team, striker, batters_known),
        non_striker_id=non_striker,
        non_striker_name=_name(bat_team, non_striker, batters_known),
        bowler_id=bowler,
        bowler_name=_name(bowl_team, bowler, bowlers_known),
    )
    return updated


# -----------------------------
# Ball-by-ball
# -----------------------------
def record_ball(state: MatchState, ball: BallInput, roster: Optional[Roster] = None) -> MatchState:
    """
    Apply one delivery:
    validate -> snapshot prior state -> resolve -> stats -> rotation -> completion.
    """
    validate_ball(state, ball)

    updated = copy.deepcopy(state)
    push_snapshot(updated)

    outcome = resolve_ball(ball)
    apply_ball_stats(updated, ball, outcome, roster)
    apply_rotation(updated, ball, outcome)
    evaluate_after_ball(updated)

    score = updated.score_b if state.phase == Phase.SECOND_INNINGS else updated.score_a
    logger.debug(
        "Match %s ball: runs=%d extra=%s wicket=%s -> %d/%d (%s)",
        updated.id, ball.runs, ball.extra.value, ball.wicket.value,
        score.runs, score.wickets, score.overs,
    )
    return updated


def undo(state: MatchState) -> MatchState:
    return _undo_snapshot(state)
