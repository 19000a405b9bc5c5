# main.py (live scoring)
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from score_api.config import (
    validate_config,
    LOG_LEVEL,
    DEFAULT_TOTAL_OVERS,
    DEFAULT_MAX_WICKETS,
)

from score_api.commentary import generate_commentary
from score_api.models import BallInput, ExtraType, MatchState, WhoOut, WicketType
from score_api.player_stats import player_aggregate_stats
from score_api.roster import Player, PlayerRole, Roster, Team
from score_api.scoring import (
    CommandStateError,
    ScoringError,
    abandon_match,
    create_match,
    end_innings,
    record_ball,
    reopen_match,
    select_participants,
    set_man_of_the_match,
    start_match,
    start_second_innings,
    swap_batting_first,
    undo,
)
from score_api.service import run_command
from score_api.store import MatchNotFoundError, MatchStore, StoreError

logger = logging.getLogger(__name__)

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="Live Cricket Scoring API",
    version="0.1.0",
    description="Ball-by-ball scoring, innings/match completion, undo, and live commentary for limited-overs matches",
)

store = MatchStore()
roster = Roster()


@app.on_event("startup")
def on_startup():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    validate_config()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.utcnow().isoformat() + "Z"}


# -----------------------
# Helpers
# -----------------------
def _load(match_id: str) -> MatchState:
    try:
        return store.load(match_id)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _run(match_id: str, command: Callable[..., MatchState], *args: Any, **kwargs: Any) -> Dict[str, Any]:
    try:
        updated = run_command(store, match_id, command, *args, **kwargs)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CommandStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ScoringError as e:
        # SelectionError and any other rejected payload
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        logger.warning("Save failed for match %s: %s", match_id, e)
        raise HTTPException(status_code=503, detail=f"Unable to save match: {str(e)}")
    return _match_out(updated)


def _match_out(state: MatchState) -> Dict[str, Any]:
    out = state.to_dict(include_history=False)
    out["undo_available"] = len(state.history)
    return out


def _team_name(team_id: str) -> str:
    team = roster.get_team(team_id)
    return team.name if team is not None else team_id


# -----------------------
# Match setup
# -----------------------
class PlayerIn(BaseModel):
    id: str
    name: str
    role: PlayerRole = "All-Rounder"


class TeamIn(BaseModel):
    id: str
    name: str
    short_name: str = ""
    players: list[PlayerIn] = Field(default_factory=list)


class CreateMatchRequest(BaseModel):
    tournament_id: str
    team_a: TeamIn = Field(..., description="Team batting first")
    team_b: TeamIn = Field(..., description="Team batting second")
    total_overs: int = Field(DEFAULT_TOTAL_OVERS, ge=1, le=50)
    max_wickets: int = Field(DEFAULT_MAX_WICKETS, ge=1)
    venue: str = "Main Ground"
    date: str = ""
    time: str = ""
    match_type: str = "League"


def _register_team(team: TeamIn) -> None:
    roster.add_team(Team(
        id=team.id,
        name=team.name,
        short_name=team.short_name or team.name[:3].upper(),
        players=[Player(id=p.id, name=p.name, role=p.role) for p in team.players],
    ))


@app.post("/api/matches")
def api_create_match(req: CreateMatchRequest):
    try:
        state = create_match(
            match_id=uuid.uuid4().hex,
            tournament_id=req.tournament_id,
            team_a_id=req.team_a.id,
            team_b_id=req.team_b.id,
            total_overs=req.total_overs,
            max_wickets=req.max_wickets,
            venue=req.venue,
            date=req.date,
            time=req.time,
            match_type=req.match_type,
        )
    except ScoringError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _register_team(req.team_a)
    _register_team(req.team_b)

    try:
        store.save(state)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=f"Unable to save match: {str(e)}")
    return _match_out(state)


@app.get("/api/matches/{match_id}")
def api_get_match(match_id: str):
    return _match_out(_load(match_id))


@app.get("/api/tournaments/{tournament_id}/matches")
def api_list_matches(tournament_id: str):
    matches = store.list_tournament(tournament_id)
    return {"tournament_id": tournament_id, "matches_count": len(matches), "matches": [_match_out(m) for m in matches]}


# -----------------------
# Lifecycle commands
# -----------------------
@app.post("/api/matches/{match_id}/start")
def api_start_match(match_id: str):
    return _run(match_id, start_match)


@app.post("/api/matches/{match_id}/abandon")
def api_abandon_match(match_id: str):
    return _run(match_id, abandon_match)


@app.post("/api/matches/{match_id}/swap-batting")
def api_swap_batting(match_id: str):
    return _run(match_id, swap_batting_first)


@app.post("/api/matches/{match_id}/end-innings")
def api_end_innings(match_id: str):
    return _run(match_id, end_innings)


@app.post("/api/matches/{match_id}/second-innings")
def api_start_second_innings(match_id: str):
    return _run(match_id, start_second_innings)


@app.post("/api/matches/{match_id}/reopen")
def api_reopen_match(match_id: str):
    return _run(match_id, reopen_match)


@app.post("/api/matches/{match_id}/undo")
def api_undo(match_id: str):
    return _run(match_id, undo)


class ParticipantsRequest(BaseModel):
    striker_id: Optional[str] = Field(None, description="Omit to keep, empty string to clear")
    non_striker_id: Optional[str] = None
    bowler_id: Optional[str] = None


@app.put("/api/matches/{match_id}/participants")
def api_select_participants(match_id: str, req: ParticipantsRequest):
    return _run(
        match_id,
        select_participants,
        striker_id=req.striker_id,
        non_striker_id=req.non_striker_id,
        bowler_id=req.bowler_id,
        roster=roster,
    )


class ManOfTheMatchRequest(BaseModel):
    player_id: str


@app.put("/api/matches/{match_id}/man-of-the-match")
def api_man_of_the_match(match_id: str, req: ManOfTheMatchRequest):
    return _run(match_id, set_man_of_the_match, req.player_id)


# -----------------------
# Ball-by-ball
# -----------------------
class BallRequest(BaseModel):
    runs: int = Field(0, description="0, 1, 2, 3, 4 or 6")
    extra: ExtraType = ExtraType.NONE
    overthrow: bool = False
    wicket: WicketType = WicketType.NONE
    who_out: WhoOut = Field(WhoOut.STRIKER, description="Only used for RUN_OUT")
    fielder_id: Optional[str] = Field(None, description="Required for CAUGHT / RUN_OUT")


@app.post("/api/matches/{match_id}/balls")
def api_record_ball(match_id: str, req: BallRequest):
    ball = BallInput(
        runs=req.runs,
        extra=req.extra,
        overthrow=req.overthrow,
        wicket=req.wicket,
        who_out=req.who_out,
        fielder_id=req.fielder_id,
    )
    return _run(match_id, record_ball, ball, roster)


# -----------------------
# Commentary (best-effort, read-only)
# -----------------------
@app.get("/api/matches/{match_id}/commentary")
def api_commentary(match_id: str):
    state = _load(match_id)
    text = generate_commentary(state, _team_name(state.team_a_id), _team_name(state.team_b_id))
    return {"match_id": match_id, "commentary": text}


# -----------------------
# Player aggregates
# -----------------------
@app.get("/api/players/{player_id}/stats")
def api_player_stats(player_id: str, tournament_id: Optional[str] = None):
    matches = store.list_tournament(tournament_id) if tournament_id else store.all_matches()
    agg = player_aggregate_stats(player_id, matches)
    return {"tournament_id": tournament_id, "stats": agg.to_dict()}
