# score_api/history.py
from __future__ import annotations

import json
import logging
from typing import Optional

from score_api.config import HISTORY_LIMIT
from score_api.models import MatchState

logger = logging.getLogger(__name__)


def serialize_snapshot(state: MatchState) -> str:
    # The history list is never nested inside a snapshot.
    return json.dumps(state.to_dict(include_history=False), sort_keys=True)


def push_snapshot(state: MatchState, limit: Optional[int] = None) -> None:
    """
    Append a snapshot of `state` (as it is right now) to its own history.

    Must be called BEFORE the command mutates anything. Oldest entries are
    evicted once `limit` is exceeded.
    """
    cap = HISTORY_LIMIT if limit is None else limit
    state.history.append(serialize_snapshot(state))
    overflow = len(state.history) - cap
    if overflow > 0:
        del state.history[:overflow]


def undo(state: MatchState) -> MatchState:
    """
    Replace the whole state with the newest snapshot.

    Empty history is a silent no-op (returns `state` unchanged).
    """
    if not state.history:
        return state

    remaining = list(state.history)
    snapshot = remaining.pop()

    restored = MatchState.from_dict(json.loads(snapshot))
    restored.history = remaining
    logger.info("Match %s undo, %d snapshot(s) left", state.id, len(remaining))
    return restored
