# score_api/service.py
from __future__ import annotations

import logging
from typing import Any, Callable

from score_api.models import MatchState
from score_api.store import MatchStore, StoreError

logger = logging.getLogger(__name__)

Command = Callable[..., MatchState]


def run_command(store: MatchStore, match_id: str, command: Command, *args: Any, **kwargs: Any) -> MatchState:
    """
    Load -> apply -> save.

    Raises whatever the command raises (nothing saved), MatchNotFoundError for
    an unknown id, and StoreError if the save fails (stored record unchanged).
    """
    state = store.load(match_id)
    updated = command(state, *args, **kwargs)
    store.save(updated)
    return updated


class MatchSession:
    """
    Local working copy of one match for an admin client.

    apply() updates the local state optimistically, then saves. If the save
    fails the local state goes back to what it was before the command.
    """

    def __init__(self, store: MatchStore, state: MatchState) -> None:
        self.store = store
        self.state = state

    @classmethod
    def open(cls, store: MatchStore, match_id: str) -> "MatchSession":
        return cls(store, store.load(match_id))

    def apply(self, command: Command, *args: Any, **kwargs: Any) -> MatchState:
        prior = self.state
        self.state = command(prior, *args, **kwargs)
        try:
            self.store.save(self.state)
        except StoreError:
            logger.warning("Save failed for match %s, rolling back local state", prior.id)
            self.state = prior
            raise
        return self.state
