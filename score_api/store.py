# score_api/store.py
from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List

from score_api.models import MatchState

logger = logging.getLogger(__name__)

OnChange = Callable[[List[MatchState]], None]


class StoreError(Exception):
    """Raised when a match cannot be saved."""
    pass


class MatchNotFoundError(Exception):
    """Raised when a match id has no stored record."""
    pass


class MatchStore:
    """
    In-memory match store (sufficient for single-instance deploys).

    Records are kept as plain dicts so readers never share objects with the
    writer, and are repaired to full structures on load. Last write wins.
    """

    def __init__(self) -> None:
        # match_id -> stored dict
        self._records: Dict[str, Dict[str, Any]] = {}
        # tournament_id -> callbacks
        self._subscribers: Dict[str, List[OnChange]] = {}

    def load(self, match_id: str) -> MatchState:
        record = self._records.get(match_id)
        if record is None:
            raise MatchNotFoundError(f"Match not found: {match_id}")
        return MatchState.from_dict(copy.deepcopy(record))

    def save(self, state: MatchState) -> None:
        self._records[state.id] = state.to_dict()
        self._notify(state.tournament_id)

    def delete(self, match_id: str) -> None:
        record = self._records.pop(match_id, None)
        if record is not None:
            self._notify(record.get("tournament_id", ""))

    def list_tournament(self, tournament_id: str) -> List[MatchState]:
        return [
            MatchState.from_dict(copy.deepcopy(r))
            for r in self._records.values()
            if r.get("tournament_id") == tournament_id
        ]

    def all_matches(self) -> List[MatchState]:
        return [MatchState.from_dict(copy.deepcopy(r)) for r in self._records.values()]

    def subscribe(self, tournament_id: str, on_change: OnChange) -> Callable[[], None]:
        """
        Stream the full match list of a tournament after every change.
        Returns an unsubscribe callable.
        """
        self._subscribers.setdefault(tournament_id, []).append(on_change)

        def _unsubscribe() -> None:
            callbacks = self._subscribers.get(tournament_id, [])
            if on_change in callbacks:
                callbacks.remove(on_change)

        return _unsubscribe

    def _notify(self, tournament_id: str) -> None:
        callbacks = list(self._subscribers.get(tournament_id, []))
        if not callbacks:
            return
        matches = self.list_tournament(tournament_id)
        for cb in callbacks:
            try:
                cb(matches)
            except Exception:
                logger.exception("Subscriber for tournament %s failed", tournament_id)
