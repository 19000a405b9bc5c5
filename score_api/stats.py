# score_api/stats.py
from __future__ import annotations

from typing import Optional

from score_api.models import (
    BallInput,
    BattingStats,
    BowlingStats,
    ExtraType,
    MatchState,
    TeamScorecard,
    WhoOut,
    WicketType,
)
from score_api.outcome import BallOutcome, add_extras
from score_api.overs import BALLS_PER_OVER
from score_api.roster import Roster, player_name

# No keeper is tracked in the live participants, so stumpings name a placeholder.
KEEPER_PLACEHOLDER = "Keeper"


def get_batting_stats(
    card: TeamScorecard, player_id: str, team_id: str, roster: Optional[Roster], name_hint: str = ""
) -> BattingStats:
    """Find the batter's entry, creating it on first reference."""
    stats = card.find_batter(player_id)
    if stats is None:
        name = name_hint or player_name(roster, team_id, player_id)
        stats = BattingStats(player_id=player_id, player_name=name)
        card.batting.append(stats)
    return stats


def get_bowling_stats(
    card: TeamScorecard, player_id: str, team_id: str, roster: Optional[Roster], name_hint: str = ""
) -> BowlingStats:
    """Find the bowler's entry, creating it on first reference."""
    stats = card.find_bowler(player_id)
    if stats is None:
        name = name_hint or player_name(roster, team_id, player_id)
        stats = BowlingStats(player_id=player_id, player_name=name)
        card.bowling.append(stats)
    return stats


def dismissal_text(wicket: WicketType, bowler_name: str, fielder_name: str) -> str:
    if wicket == WicketType.BOWLED:
        return f"b {bowler_name}"
    if wicket == WicketType.CAUGHT:
        return f"c {fielder_name} b {bowler_name}"
    if wicket == WicketType.LBW:
        return f"lbw b {bowler_name}"
    if wicket == WicketType.STUMPED:
        return f"st {KEEPER_PLACEHOLDER} b {bowler_name}"
    if wicket == WicketType.HIT_WICKET:
        return f"hit wkt b {bowler_name}"
    if wicket == WicketType.RUN_OUT:
        return f"run out ({fielder_name})"
    raise ValueError(f"No dismissal for wicket type: {wicket!r}")


def dismissed_is_non_striker(ball: BallInput) -> bool:
    return ball.wicket == WicketType.RUN_OUT and ball.who_out == WhoOut.NON_STRIKER


def update_striker(batsman: BattingStats, ball: BallInput, outcome: BallOutcome) -> None:
    if ball.extra != ExtraType.WIDE:
        batsman.balls += 1
    batsman.runs += outcome.batsman_runs

    if ball.overthrow:
        # Overthrows always count as a four for the striker.
        batsman.fours += 1
    elif outcome.batsman_runs == 4:
        batsman.fours += 1
    elif outcome.batsman_runs == 6:
        batsman.sixes += 1


def update_bowler(bowler: BowlingStats, ball: BallInput, outcome: BallOutcome) -> None:
    bowler.balls_bowled += outcome.legal_ball_increment
    bowler.runs_conceded += outcome.bowler_runs_conceded
    if ball.wicket not in (WicketType.NONE, WicketType.RUN_OUT):
        bowler.wickets += 1


def track_maiden(state: MatchState, bowler: BowlingStats, outcome: BallOutcome) -> None:
    """Accumulate the over-in-progress counters and credit a maiden on the 6th legal ball."""
    state.current_over_runs += outcome.bowler_runs_conceded
    state.current_over_balls += outcome.legal_ball_increment

    if state.current_over_balls < BALLS_PER_OVER:
        return

    if state.current_over_runs == 0:
        bowler.maidens += 1
    state.current_over_runs = 0
    state.current_over_balls = 0


def apply_ball_stats(
    state: MatchState,
    ball: BallInput,
    outcome: BallOutcome,
    roster: Optional[Roster] = None,
) -> None:
    """Mutate the scorecards and the current innings score for one resolved ball."""
    bat_card = state.batting_card()
    bowl_card = state.bowling_card()
    bat_team = state.batting_team_id()
    bowl_team = state.bowling_team_id()
    live = state.live

    striker = get_batting_stats(bat_card, live.striker_id, bat_team, roster, live.striker_name)
    update_striker(striker, ball, outcome)

    bowler = get_bowling_stats(bowl_card, live.bowler_id, bowl_team, roster, live.bowler_name)

    if ball.wicket != WicketType.NONE:
        if dismissed_is_non_striker(ball):
            out_id, out_name = live.non_striker_id, live.non_striker_name
        else:
            out_id, out_name = live.striker_id, live.striker_name
        dismissed = get_batting_stats(bat_card, out_id, bat_team, roster, out_name)
        fielder = player_name(roster, bowl_team, ball.fielder_id) if ball.fielder_id else ""
        dismissed.is_out = True
        dismissed.dismissal = dismissal_text(ball.wicket, bowler.player_name, fielder)

    update_bowler(bowler, ball, outcome)
    track_maiden(state, bowler, outcome)

    add_extras(bat_card.extras, ball.extra, outcome)

    score = state.current_score()
    score.runs += outcome.team_runs
    score.balls += outcome.legal_ball_increment
    if ball.wicket != WicketType.NONE:
        score.wickets += 1
