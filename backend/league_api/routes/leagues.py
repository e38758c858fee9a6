"""
League, Season and Team Routes
Minimal registration endpoints that feed the schedule generator.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from league_api.database import get_session
from league_api.errors import LeagueError
from league_api.models.league import League
from league_api.models.season import Season
from league_api.models.team import Team
from league_api.services.participants import list_league_teams, require_league
from league_api.utils.http_errors import to_http_exception

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class SeasonCreateRequest(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name is required")
        return v


class SeasonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class LeagueCreateRequest(BaseModel):
    name: str
    current_season_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name is required")
        return v


class LeagueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    current_season_id: Optional[int] = None
    created_at: datetime


class TeamCreateRequest(BaseModel):
    name: str


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    league_id: int
    name: str
    created_at: datetime


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/seasons", response_model=SeasonResponse, status_code=201)
def create_season(request: SeasonCreateRequest, session: Session = Depends(get_session)):
    season = Season(name=request.name)
    session.add(season)
    session.commit()
    session.refresh(season)
    return season


@router.post("/leagues", response_model=LeagueResponse, status_code=201)
def create_league(request: LeagueCreateRequest, session: Session = Depends(get_session)):
    if request.current_season_id is not None and not session.get(Season, request.current_season_id):
        raise HTTPException(status_code=404, detail="Season not found")

    league = League(name=request.name, current_season_id=request.current_season_id)
    session.add(league)
    session.commit()
    session.refresh(league)
    return league


@router.get("/leagues/{league_id}", response_model=LeagueResponse)
def get_league(league_id: int, session: Session = Depends(get_session)):
    league = session.get(League, league_id)
    if not league:
        raise HTTPException(status_code=404, detail="League not found")
    return league


@router.get("/leagues/{league_id}/teams", response_model=List[TeamResponse])
def get_league_teams(league_id: int, session: Session = Depends(get_session)):
    try:
        require_league(session, league_id)
        return list_league_teams(session, league_id)
    except LeagueError as e:
        raise to_http_exception(e)


@router.post("/leagues/{league_id}/teams", response_model=TeamResponse, status_code=201)
def create_team(league_id: int, request: TeamCreateRequest, session: Session = Depends(get_session)):
    """
    Register a team in a league.

    Constraints:
    - (league_id, name) must be unique
    """
    league = session.get(League, league_id)
    if not league:
        raise HTTPException(status_code=404, detail="League not found")

    team = Team(league_id=league_id, name=request.name)
    try:
        session.add(team)
        session.commit()
        session.refresh(team)
        return team
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=409, detail=f"Team with name '{request.name}' already exists in this league")
