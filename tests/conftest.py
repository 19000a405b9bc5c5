from __future__ import annotations

from typing import Iterable

import pytest

from score_api.models import BallInput, MatchState
from score_api.roster import Player, Roster, Team
from score_api.scoring import create_match, record_ball, select_participants, start_match


def make_team(team_id: str, prefix: str, size: int = 11) -> Team:
    return Team(
        id=team_id,
        name=f"{team_id.title()} XI",
        short_name=team_id.upper(),
        players=[Player(id=f"{prefix}{i}", name=f"{prefix.upper()} Player {i}") for i in range(1, size + 1)],
    )


@pytest.fixture
def roster() -> Roster:
    return Roster([make_team("lions", "a"), make_team("tigers", "b")])


@pytest.fixture
def scheduled_match() -> MatchState:
    return create_match("m1", "t1", "lions", "tigers", total_overs=20, max_wickets=10)


@pytest.fixture
def live_match(scheduled_match: MatchState, roster: Roster) -> MatchState:
    """First innings under way: a1 on strike, a2 non-striker, b1 bowling."""
    state = start_match(scheduled_match)
    return select_participants(state, striker_id="a1", non_striker_id="a2", bowler_id="b1", roster=roster)


def play(state: MatchState, balls: Iterable[BallInput], roster: Roster = None) -> MatchState:
    for ball in balls:
        state = record_ball(state, ball, roster)
    return state


def dots(n: int) -> list:
    return [BallInput(runs=0) for _ in range(n)]


def runs_invariant_holds(state: MatchState) -> bool:
    for score, card in ((state.score_a, state.scorecard.A), (state.score_b, state.scorecard.B)):
        if score.runs != sum(b.runs for b in card.batting) + card.extras.total:
            return False
    return True
