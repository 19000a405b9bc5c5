from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from score_api.overs import balls_to_overs


TIED = "TIED"
UNKNOWN_PLAYER = "Unknown"


# -----------------------------
# Closed variants
# -----------------------------
class MatchStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    LIVE = "LIVE"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"


class Phase(str, Enum):
    FIRST_INNINGS = "FIRST_INNINGS"
    INNINGS_BREAK = "INNINGS_BREAK"
    SECOND_INNINGS = "SECOND_INNINGS"
    COMPLETE = "COMPLETE"
    ABANDONED = "ABANDONED"


class ExtraType(str, Enum):
    NONE = "NONE"
    WIDE = "WIDE"
    NO_BALL = "NO_BALL"
    LEG_BYE = "LEG_BYE"
    BYE = "BYE"


class WicketType(str, Enum):
    NONE = "NONE"
    BOWLED = "BOWLED"
    CAUGHT = "CAUGHT"
    LBW = "LBW"
    STUMPED = "STUMPED"
    RUN_OUT = "RUN_OUT"
    HIT_WICKET = "HIT_WICKET"


class WhoOut(str, Enum):
    STRIKER = "STRIKER"
    NON_STRIKER = "NON_STRIKER"


VALID_RUN_VALUES = (0, 1, 2, 3, 4, 6)
FIELDER_REQUIRED = (WicketType.CAUGHT, WicketType.RUN_OUT)


# -----------------------------
# Scores and scorecards
# -----------------------------
@dataclass
class InningsScore:
    runs: int = 0
    wickets: int = 0
    balls: int = 0
    is_declared: bool = False

    @property
    def overs(self) -> float:
        return balls_to_overs(self.balls)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runs": self.runs,
            "wickets": self.wickets,
            "balls": self.balls,
            "overs": self.overs,
            "is_declared": self.is_declared,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "InningsScore":
        data = data or {}
        return cls(
            runs=int(data.get("runs", 0)),
            wickets=int(data.get("wickets", 0)),
            balls=int(data.get("balls", 0)),
            is_declared=bool(data.get("is_declared", False)),
        )


@dataclass
class BattingStats:
    player_id: str
    player_name: str = UNKNOWN_PLAYER
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    is_out: bool = False
    dismissal: Optional[str] = None

    @property
    def strike_rate(self) -> float:
        return (self.runs / self.balls * 100) if self.balls > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "runs": self.runs,
            "balls": self.balls,
            "fours": self.fours,
            "sixes": self.sixes,
            "is_out": self.is_out,
        }
        if self.is_out and self.dismissal is not None:
            out["dismissal"] = self.dismissal
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BattingStats":
        return cls(
            player_id=str(data["player_id"]),
            player_name=data.get("player_name") or UNKNOWN_PLAYER,
            runs=int(data.get("runs", 0)),
            balls=int(data.get("balls", 0)),
            fours=int(data.get("fours", 0)),
            sixes=int(data.get("sixes", 0)),
            is_out=bool(data.get("is_out", False)),
            dismissal=data.get("dismissal"),
        )


@dataclass
class BowlingStats:
    player_id: str
    player_name: str = UNKNOWN_PLAYER
    balls_bowled: int = 0
    runs_conceded: int = 0
    wickets: int = 0
    maidens: int = 0

    @property
    def overs(self) -> float:
        return balls_to_overs(self.balls_bowled)

    @property
    def economy(self) -> float:
        return (self.runs_conceded / self.balls_bowled * 6) if self.balls_bowled > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "balls_bowled": self.balls_bowled,
            "overs": self.overs,
            "runs_conceded": self.runs_conceded,
            "wickets": self.wickets,
            "maidens": self.maidens,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BowlingStats":
        return cls(
            player_id=str(data["player_id"]),
            player_name=data.get("player_name") or UNKNOWN_PLAYER,
            balls_bowled=int(data.get("balls_bowled", 0)),
            runs_conceded=int(data.get("runs_conceded", 0)),
            wickets=int(data.get("wickets", 0)),
            maidens=int(data.get("maidens", 0)),
        )


@dataclass
class Extras:
    wide: int = 0
    no_ball: int = 0
    bye: int = 0
    leg_bye: int = 0

    @property
    def total(self) -> int:
        return self.wide + self.no_ball + self.bye + self.leg_bye

    def to_dict(self) -> Dict[str, Any]:
        return {"wide": self.wide, "no_ball": self.no_ball, "bye": self.bye, "leg_bye": self.leg_bye}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Extras":
        data = data or {}
        return cls(
            wide=int(data.get("wide", 0)),
            no_ball=int(data.get("no_ball", 0)),
            bye=int(data.get("bye", 0)),
            leg_bye=int(data.get("leg_bye", 0)),
        )


@dataclass
class TeamScorecard:
    """Batting and extras belong to this side's innings; bowling is this side's attack."""
    batting: List[BattingStats] = field(default_factory=list)
    bowling: List[BowlingStats] = field(default_factory=list)
    extras: Extras = field(default_factory=Extras)

    def find_batter(self, player_id: str) -> Optional[BattingStats]:
        for b in self.batting:
            if b.player_id == player_id:
                return b
        return None

    def find_bowler(self, player_id: str) -> Optional[BowlingStats]:
        for b in self.bowling:
            if b.player_id == player_id:
                return b
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "batting": [b.to_dict() for b in self.batting],
            "bowling": [b.to_dict() for b in self.bowling],
            "extras": self.extras.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TeamScorecard":
        data = data or {}
        return cls(
            batting=[BattingStats.from_dict(b) for b in data.get("batting") or []],
            bowling=[BowlingStats.from_dict(b) for b in data.get("bowling") or []],
            extras=Extras.from_dict(data.get("extras")),
        )


@dataclass
class Scorecard:
    A: TeamScorecard = field(default_factory=TeamScorecard)
    B: TeamScorecard = field(default_factory=TeamScorecard)

    def to_dict(self) -> Dict[str, Any]:
        return {"A": self.A.to_dict(), "B": self.B.to_dict()}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Scorecard":
        data = data or {}
        return cls(A=TeamScorecard.from_dict(data.get("A")), B=TeamScorecard.from_dict(data.get("B")))


@dataclass
class LiveParticipants:
    striker_id: str = ""
    striker_name: str = ""
    non_striker_id: str = ""
    non_striker_name: str = ""
    bowler_id: str = ""
    bowler_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "striker_id": self.striker_id,
            "striker_name": self.striker_name,
            "non_striker_id": self.non_striker_id,
            "non_striker_name": self.non_striker_name,
            "bowler_id": self.bowler_id,
            "bowler_name": self.bowler_name,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LiveParticipants":
        data = data or {}
        return cls(**{k: str(data.get(k) or "") for k in cls().to_dict()})


# -----------------------------
# Command payload
# -----------------------------
@dataclass(frozen=True)
class BallInput:
    runs: int = 0
    extra: ExtraType = ExtraType.NONE
    overthrow: bool = False
    wicket: WicketType = WicketType.NONE
    # Only meaningful for RUN_OUT
    who_out: WhoOut = WhoOut.STRIKER
    # Required for CAUGHT / RUN_OUT
    fielder_id: Optional[str] = None

    @property
    def effective_runs(self) -> int:
        return self.runs + (4 if self.overthrow else 0)


# -----------------------------
# Match
# -----------------------------
@dataclass
class MatchState:
    id: str
    tournament_id: str
    team_a_id: str
    team_b_id: str

    total_overs: int
    max_wickets: int = 10

    status: MatchStatus = MatchStatus.SCHEDULED
    phase: Phase = Phase.FIRST_INNINGS

    score_a: InningsScore = field(default_factory=InningsScore)
    score_b: InningsScore = field(default_factory=InningsScore)
    scorecard: Scorecard = field(default_factory=Scorecard)
    live: LiveParticipants = field(default_factory=LiveParticipants)

    winner_id: Optional[str] = None
    man_of_the_match: Optional[str] = None

    # Maiden tracking for the over in progress
    current_over_runs: int = 0
    current_over_balls: int = 0

    # Serialized prior states (newest last)
    history: List[str] = field(default_factory=list)

    # Fixture metadata (not used by the scoring rules)
    venue: str = "Main Ground"
    date: str = ""
    time: str = ""
    match_type: str = "League"

    @property
    def is_second_innings(self) -> bool:
        return self.phase == Phase.SECOND_INNINGS

    @property
    def target(self) -> int:
        return self.score_a.runs + 1

    def batting_side(self) -> str:
        return "B" if self.is_second_innings else "A"

    def bowling_side(self) -> str:
        return "A" if self.is_second_innings else "B"

    def batting_team_id(self) -> str:
        return self.team_b_id if self.is_second_innings else self.team_a_id

    def bowling_team_id(self) -> str:
        return self.team_a_id if self.is_second_innings else self.team_b_id

    def current_score(self) -> InningsScore:
        return self.score_b if self.is_second_innings else self.score_a

    def batting_card(self) -> TeamScorecard:
        return getattr(self.scorecard, self.batting_side())

    def bowling_card(self) -> TeamScorecard:
        return getattr(self.scorecard, self.bowling_side())

    def to_dict(self, include_history: bool = True) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "team_a_id": self.team_a_id,
            "team_b_id": self.team_b_id,
            "total_overs": self.total_overs,
            "max_wickets": self.max_wickets,
            "status": self.status.value,
            "phase": self.phase.value,
            "score_a": self.score_a.to_dict(),
            "score_b": self.score_b.to_dict(),
            "scorecard": self.scorecard.to_dict(),
            "live": self.live.to_dict(),
            "winner_id": self.winner_id,
            "man_of_the_match": self.man_of_the_match,
            "current_over_runs": self.current_over_runs,
            "current_over_balls": self.current_over_balls,
            "venue": self.venue,
            "date": self.date,
            "time": self.time,
            "match_type": self.match_type,
        }
        if include_history:
            out["history"] = list(self.history)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchState":
        """
        Rebuild a match from its stored dict.

        Missing nested blocks (scorecard, live participants, extras) are
        repaired to empty structures rather than raising.
        """
        return cls(
            id=str(data["id"]),
            tournament_id=str(data.get("tournament_id", "")),
            team_a_id=str(data["team_a_id"]),
            team_b_id=str(data["team_b_id"]),
            total_overs=int(data.get("total_overs", 20)),
            max_wickets=int(data.get("max_wickets", 10)),
            status=MatchStatus(data.get("status", MatchStatus.SCHEDULED.value)),
            phase=Phase(data.get("phase", Phase.FIRST_INNINGS.value)),
            score_a=InningsScore.from_dict(data.get("score_a")),
            score_b=InningsScore.from_dict(data.get("score_b")),
            scorecard=Scorecard.from_dict(data.get("scorecard")),
            live=LiveParticipants.from_dict(data.get("live")),
            winner_id=data.get("winner_id"),
            man_of_the_match=data.get("man_of_the_match"),
            current_over_runs=int(data.get("current_over_runs", 0)),
            current_over_balls=int(data.get("current_over_balls", 0)),
            history=list(data.get("history") or []),
            venue=data.get("venue", "Main Ground"),
            date=data.get("date", ""),
            time=data.get("time", ""),
            match_type=data.get("match_type", "League"),
        )
