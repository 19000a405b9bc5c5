# score_api/overs.py
from __future__ import annotations

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from score_api.models import InningsScore

BALLS_PER_OVER = 6
OversLike = Union[str, int, float]


def balls_to_overs(balls: int) -> float:
    """
    Converts a legal-ball count to cricket overs notation.

    The fractional digit is a ball count (0-5), NOT a decimal fraction:
      13 balls -> 2.1 (two overs and one ball), never 2.1666
    """
    if balls < 0:
        raise ValueError(f"Balls cannot be negative: {balls}")
    full, rem = divmod(int(balls), BALLS_PER_OVER)
    return float(f"{full}.{rem}")


def overs_to_balls(overs: OversLike) -> int:
    """Parse overs notation ("19.4", 20, 7.2) into legal balls; the digit after the dot is balls 0-5."""
    if overs is None:
        raise ValueError("Overs cannot be None")

    text = str(overs).strip()
    if not text:
        raise ValueError("Overs cannot be empty")

    whole, _, part = text.partition(".")
    full = int(whole) if whole else 0
    balls = int(part) if part.strip() else 0

    if full < 0:
        raise ValueError(f"Invalid overs: {overs}")
    if not 0 <= balls < BALLS_PER_OVER:
        raise ValueError(f"Invalid overs format: {overs} (balls part must be 0-5)")
    return full * BALLS_PER_OVER + balls


def is_over_complete(balls: int) -> bool:
    return balls > 0 and balls % BALLS_PER_OVER == 0


def effective_innings_balls(score: "InningsScore", total_overs: int, max_wickets: int) -> int:
    """
    Ball count an NRR aggregator must use for a completed innings.

    If the side was all out, the innings counts as the full over quota.
    Otherwise the actual legal balls faced are used (e.g. a chase won in 18.3).
    An innings with nothing bowled gives 0; callers skip it.
    """
    if score.wickets >= max_wickets:
        return total_overs * BALLS_PER_OVER
    return score.balls
