# score_api/outcome.py
from __future__ import annotations

from dataclasses import dataclass

from score_api.models import BallInput, ExtraType, Extras


@dataclass(frozen=True)
class BallOutcome:
    batsman_runs: int
    team_extra_runs: int
    legal_ball_increment: int  # 0 or 1
    bowler_runs_conceded: int
    effective_runs: int

    @property
    def team_runs(self) -> int:
        return self.batsman_runs + self.team_extra_runs


def resolve_ball(ball: BallInput) -> BallOutcome:
    """
    Resolve a delivery into runs/extras/validity.

    eff = runs + 4 if overthrow.

      extra    | team extras | legal | bowler conceded | batsman
      NONE     | 0           | yes   | eff             | eff
      WIDE     | 1 + eff     | no    | 1 + eff         | 0
      NO_BALL  | 1           | no    | 1 + eff         | eff
      BYE      | eff         | yes   | 0               | 0
      LEG_BYE  | eff         | yes   | 0               | 0
    """
    eff = ball.effective_runs
    extra = ball.extra

    if extra == ExtraType.NONE:
        return BallOutcome(eff, 0, 1, eff, eff)
    if extra == ExtraType.WIDE:
        return BallOutcome(0, 1 + eff, 0, 1 + eff, eff)
    if extra == ExtraType.NO_BALL:
        return BallOutcome(eff, 1, 0, 1 + eff, eff)
    if extra in (ExtraType.BYE, ExtraType.LEG_BYE):
        return BallOutcome(0, eff, 1, 0, eff)

    raise ValueError(f"Unhandled extra type: {extra!r}")


def add_extras(extras: Extras, extra: ExtraType, outcome: BallOutcome) -> None:
    """Accumulate the team extra runs into the matching counter."""
    if extra == ExtraType.NONE:
        return
    if extra == ExtraType.WIDE:
        extras.wide += outcome.team_extra_runs
    elif extra == ExtraType.NO_BALL:
        extras.no_ball += outcome.team_extra_runs
    elif extra == ExtraType.BYE:
        extras.bye += outcome.team_extra_runs
    elif extra == ExtraType.LEG_BYE:
        extras.leg_bye += outcome.team_extra_runs
    else:
        raise ValueError(f"Unhandled extra type: {extra!r}")
