# score_api/roster.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Literal

from score_api.models import UNKNOWN_PLAYER, TeamScorecard

PlayerRole = Literal["Batsman", "Bowler", "All-Rounder", "WicketKeeper"]


@dataclass
class Player:
    id: str
    name: str
    role: PlayerRole = "All-Rounder"


@dataclass
class Team:
    id: str
    name: str
    short_name: str = ""
    players: List[Player] = field(default_factory=list)


class Roster:
    """
    In-process roster lookup (team CRUD lives outside this service).

    resolve_player_name() returns None for an unknown team/player; callers
    fall back to a placeholder via player_name().
    """

    def __init__(self, teams: Optional[List[Team]] = None) -> None:
        self._teams: Dict[str, Team] = {}
        for t in teams or []:
            self.add_team(t)

    def add_team(self, team: Team) -> None:
        self._teams[team.id] = team

    def get_team(self, team_id: str) -> Optional[Team]:
        return self._teams.get(team_id)

    def resolve_player_name(self, team_id: str, player_id: str) -> Optional[str]:
        team = self._teams.get(team_id)
        if team is None:
            return None
        for p in team.players:
            if p.id == player_id:
                return p.name
        return None


def player_name(roster: Optional[Roster], team_id: str, player_id: str) -> str:
    if roster is None:
        return UNKNOWN_PLAYER
    return roster.resolve_player_name(team_id, player_id) or UNKNOWN_PLAYER


def squad_size(max_wickets: int) -> int:
    """Single-batter formats field one batter; otherwise wickets + 1."""
    if max_wickets <= 0:
        raise ValueError("max_wickets must be positive")
    return 1 if max_wickets == 1 else max_wickets + 1


def available_batters(
    team: Team,
    card: TeamScorecard,
    striker_id: str = "",
    non_striker_id: str = "",
) -> List[Player]:
    """Players who are neither dismissed nor already at the crease."""
    out: List[Player] = []
    for p in team.players:
        if p.id in (striker_id, non_striker_id):
            continue
        stats = card.find_batter(p.id)
        if stats is not None and stats.is_out:
            continue
        out.append(p)
    return out
