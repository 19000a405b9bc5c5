# score_api/player_stats.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional

from score_api.models import BattingStats, BowlingStats, MatchState


@dataclass
class PlayerAggregate:
    """
    Career line for one player across matches.
    Balls are kept as BALLS; rates are derived.
    """
    player_id: str
    innings_bat: int = 0
    runs: int = 0
    balls: int = 0
    dismissals: int = 0
    highest: int = 0
    innings_bowl: int = 0
    wickets: int = 0
    runs_conceded: int = 0
    balls_bowled: int = 0

    @property
    def strike_rate(self) -> float:
        return (self.runs / self.balls * 100) if self.balls > 0 else 0.0

    @property
    def average(self) -> float:
        # Never dismissed -> average is just the runs scored.
        if self.dismissals > 0:
            return self.runs / self.dismissals
        return float(self.runs) if self.innings_bat > 0 else 0.0

    @property
    def economy(self) -> float:
        return (self.runs_conceded / self.balls_bowled * 6) if self.balls_bowled > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["strike_rate"] = round(self.strike_rate, 2)
        out["average"] = round(self.average, 2)
        out["economy"] = round(self.economy, 2)
        return out


def _find_batting(match: MatchState, player_id: str) -> Optional[BattingStats]:
    return match.scorecard.A.find_batter(player_id) or match.scorecard.B.find_batter(player_id)


def _find_bowling(match: MatchState, player_id: str) -> Optional[BowlingStats]:
    return match.scorecard.A.find_bowler(player_id) or match.scorecard.B.find_bowler(player_id)


def player_aggregate_stats(player_id: str, matches: Iterable[MatchState]) -> PlayerAggregate:
    agg = PlayerAggregate(player_id=player_id)

    for m in matches:
        bat = _find_batting(m, player_id)
        if bat is not None:
            agg.innings_bat += 1
            agg.runs += bat.runs
            agg.balls += bat.balls
            if bat.is_out:
                agg.dismissals += 1
            agg.highest = max(agg.highest, bat.runs)

        bowl = _find_bowling(m, player_id)
        if bowl is not None:
            agg.innings_bowl += 1
            agg.wickets += bowl.wickets
            agg.runs_conceded += bowl.runs_conceded
            agg.balls_bowled += bowl.balls_bowled

    return agg
