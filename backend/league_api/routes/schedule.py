"""
League Schedule API Routes
Generates the round-robin schedule of a league and exposes its matches and rounds.
"""

from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy import or_
from sqlmodel import Session, select

from league_api.database import get_session
from league_api.errors import LeagueError
from league_api.models.match import Match
from league_api.models.round import Round
from league_api.models.team import Team
from league_api.services.participants import require_league
from league_api.services.schedule_generator import (
    MATCH_DURATION_HOURS,
    delete_league_schedule,
    generate_match_schedule,
    refresh_round_bounds,
)
from league_api.utils.dates import add_hours, parse_start_date
from league_api.utils.http_errors import to_http_exception

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class ScheduleGenerateRequest(BaseModel):
    start_date: Optional[str] = None  # ISO date or datetime; validated by the generator
    season_id: Optional[int] = None


class MatchUpdateRequest(BaseModel):
    """Only these fields are editable; anything else is rejected with 422."""

    model_config = ConfigDict(extra="forbid")

    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    start_date: Optional[datetime] = None


class TeamRef(BaseModel):
    id: int
    name: str


class MatchResponse(BaseModel):
    id: int
    league_id: int
    season_id: Optional[int] = None
    round_id: Optional[int] = None
    round_name: Optional[str] = None
    sequence_in_round: Optional[int] = None
    home_team: TeamRef
    away_team: TeamRef
    start_date: datetime
    end_date: datetime
    is_completed: bool
    is_result_approved: bool


class RoundResponse(BaseModel):
    id: int
    name: str
    league_id: int
    season_id: Optional[int] = None
    start_date: datetime
    end_date: datetime
    matches: List[MatchResponse]


class ScheduleDeleteResponse(BaseModel):
    deleted_matches: int


def _match_to_response(m: Match) -> MatchResponse:
    return MatchResponse(
        id=m.id,
        league_id=m.league_id,
        season_id=m.season_id,
        round_id=m.round_id,
        round_name=m.round.name if m.round else None,
        sequence_in_round=m.sequence_in_round,
        home_team=TeamRef(id=m.home_team.id, name=m.home_team.name),
        away_team=TeamRef(id=m.away_team.id, name=m.away_team.name),
        start_date=m.start_date,
        end_date=m.end_date,
        is_completed=m.is_completed,
        is_result_approved=m.is_result_approved,
    )


def _round_to_response(r: Round) -> RoundResponse:
    return RoundResponse(
        id=r.id,
        name=r.name,
        league_id=r.league_id,
        season_id=r.season_id,
        start_date=r.start_date,
        end_date=r.end_date,
        matches=[_match_to_response(m) for m in r.matches],
    )


def _require_league(session: Session, league_id: int) -> None:
    try:
        require_league(session, league_id)
    except LeagueError as e:
        raise to_http_exception(e)


# ============================================================================
# Schedule Generation
# ============================================================================


@router.post("/leagues/{league_id}/schedule", response_model=List[MatchResponse], status_code=201)
def generate_schedule(league_id: int, request: ScheduleGenerateRequest, session: Session = Depends(get_session)):
    """
    Generate the full round-robin schedule for a league.

    Errors:
    - 404: league (or season) not found
    - 400: fewer than 2 teams, wrong team count, or invalid start date
    - 500: storage failure (nothing is written)

    Returns the created matches in round order with team names resolved.
    """
    try:
        matches, _rounds = generate_match_schedule(
            session, league_id, request.start_date, season_id=request.season_id
        )
    except LeagueError as e:
        raise to_http_exception(e)

    return [_match_to_response(m) for m in matches]


@router.get("/leagues/{league_id}/schedule", response_model=List[MatchResponse])
def get_schedule(league_id: int, session: Session = Depends(get_session)):
    """Get all matches of a league in creation order."""
    _require_league(session, league_id)

    matches = session.exec(select(Match).where(Match.league_id == league_id).order_by(Match.id)).all()
    return [_match_to_response(m) for m in matches]


@router.delete("/leagues/{league_id}/schedule", response_model=ScheduleDeleteResponse)
def delete_schedule(league_id: int, session: Session = Depends(get_session)):
    """Delete all matches and rounds of a league (call before regenerating)."""
    try:
        deleted = delete_league_schedule(session, league_id)
    except LeagueError as e:
        raise to_http_exception(e)
    return ScheduleDeleteResponse(deleted_matches=deleted)


# ============================================================================
# Rounds
# ============================================================================


@router.get("/leagues/{league_id}/rounds", response_model=List[RoundResponse])
def get_rounds(league_id: int, session: Session = Depends(get_session)):
    _require_league(session, league_id)

    rounds = session.exec(select(Round).where(Round.league_id == league_id).order_by(Round.start_date, Round.id)).all()
    return [_round_to_response(r) for r in rounds]


@router.get("/rounds/{round_id}", response_model=RoundResponse)
def get_round(round_id: int, session: Session = Depends(get_session)):
    round_row = session.get(Round, round_id)
    if not round_row:
        raise HTTPException(status_code=404, detail="Round not found")
    return _round_to_response(round_row)


# ============================================================================
# Matches
# ============================================================================


@router.get("/teams/{team_id}/matches", response_model=List[MatchResponse])
def get_matches_by_team(team_id: int, session: Session = Depends(get_session)):
    """Get every match a team plays, home or away, by kickoff."""
    team = session.get(Team, team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")

    matches = session.exec(
        select(Match)
        .where(or_(Match.home_team_id == team_id, Match.away_team_id == team_id))
        .order_by(Match.start_date, Match.id)
    ).all()
    return [_match_to_response(m) for m in matches]


@router.get("/leagues/{league_id}/matches/completed", response_model=List[MatchResponse])
def get_completed_matches(league_id: int, session: Session = Depends(get_session)):
    """Matches that have been played but whose result is not yet approved."""
    _require_league(session, league_id)

    matches = session.exec(
        select(Match)
        .where(
            Match.league_id == league_id,
            Match.is_completed == True,  # noqa: E712
            Match.is_result_approved == False,  # noqa: E712
        )
        .order_by(Match.start_date, Match.id)
    ).all()
    return [_match_to_response(m) for m in matches]


@router.get("/leagues/{league_id}/matches/approved", response_model=List[MatchResponse])
def get_approved_matches(league_id: int, session: Session = Depends(get_session)):
    """Matches with an approved result."""
    _require_league(session, league_id)

    matches = session.exec(
        select(Match)
        .where(Match.league_id == league_id, Match.is_result_approved == True)  # noqa: E712
        .order_by(Match.start_date, Match.id)
    ).all()
    return [_match_to_response(m) for m in matches]


@router.get("/matches/{match_id}", response_model=MatchResponse)
def get_match(match_id: int, session: Session = Depends(get_session)):
    match = session.get(Match, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    return _match_to_response(match)


@router.get("/matches/{match_id}/season")
def get_match_season(match_id: int, session: Session = Depends(get_session)) -> Dict[str, Optional[int]]:
    match = session.get(Match, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    return {"season_id": match.season_id}


@router.patch("/matches/{match_id}", response_model=MatchResponse)
def update_match(match_id: int, request: MatchUpdateRequest, session: Session = Depends(get_session)):
    """
    Update a match's teams or kickoff.

    Rules:
    - Teams must belong to the match's league and must differ
    - Changing start_date moves end_date with it (fixed 2 hour duration)
      and re-derives the round's start/end from its matches
    """
    match = session.get(Match, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")

    home_team_id = request.home_team_id if request.home_team_id is not None else match.home_team_id
    away_team_id = request.away_team_id if request.away_team_id is not None else match.away_team_id

    if home_team_id == away_team_id:
        raise HTTPException(status_code=400, detail="Home and away team must differ")

    for team_id in {request.home_team_id, request.away_team_id} - {None}:
        team = session.get(Team, team_id)
        if not team:
            raise HTTPException(status_code=404, detail=f"Team {team_id} not found")
        if team.league_id != match.league_id:
            raise HTTPException(status_code=400, detail=f"Team {team_id} does not belong to this league")

    match.home_team_id = home_team_id
    match.away_team_id = away_team_id
    if request.start_date is not None:
        try:
            start = parse_start_date(request.start_date)
        except LeagueError as e:
            raise to_http_exception(e)
        match.start_date = start
        match.end_date = add_hours(start, MATCH_DURATION_HOURS)

    session.add(match)
    if request.start_date is not None and match.round_id is not None:
        refresh_round_bounds(session, match.round_id)
    session.commit()
    session.refresh(match)
    return _match_to_response(match)
