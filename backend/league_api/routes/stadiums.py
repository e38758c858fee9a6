"""
Stadium Routes
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator
from sqlmodel import Session, select

from league_api.database import get_session
from league_api.errors import LeagueError
from league_api.models.stadium import Stadium
from league_api.services import stadiums as stadium_service
from league_api.utils.http_errors import to_http_exception

router = APIRouter()


class StadiumCreateRequest(BaseModel):
    name: str
    city: Optional[str] = None
    capacity: Optional[int] = None


class StadiumUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    city: Optional[str] = None
    capacity: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        # Omitted means unchanged; an explicit null is rejected
        if v is None:
            raise ValueError("name cannot be null")
        return v


class StadiumNameCheckRequest(BaseModel):
    name: str
    is_edit: bool = False


class StadiumNameCheckResponse(BaseModel):
    success: bool


class StadiumResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    city: Optional[str] = None
    capacity: Optional[int] = None
    created_at: datetime


@router.post("/stadiums", response_model=StadiumResponse, status_code=201)
def create_stadium(request: StadiumCreateRequest, session: Session = Depends(get_session)):
    try:
        return stadium_service.create_stadium(session, request.name, city=request.city, capacity=request.capacity)
    except LeagueError as e:
        raise to_http_exception(e)


@router.get("/stadiums", response_model=List[StadiumResponse])
def get_stadiums(session: Session = Depends(get_session)):
    return session.exec(select(Stadium).order_by(Stadium.name)).all()


@router.post("/stadiums/check-name", response_model=StadiumNameCheckResponse)
def check_stadium_name(request: StadiumNameCheckRequest, session: Session = Depends(get_session)):
    """Report whether a name is free (always true while editing)."""
    return StadiumNameCheckResponse(
        success=stadium_service.is_stadium_name_available(session, request.name, is_edit=request.is_edit)
    )


@router.patch("/stadiums/{stadium_id}", response_model=StadiumResponse)
def update_stadium(stadium_id: int, request: StadiumUpdateRequest, session: Session = Depends(get_session)):
    try:
        return stadium_service.update_stadium(session, stadium_id, request.model_dump(exclude_unset=True))
    except LeagueError as e:
        raise to_http_exception(e)


@router.delete("/stadiums/{stadium_id}", status_code=204)
def delete_stadium(stadium_id: int, session: Session = Depends(get_session)):
    try:
        stadium_service.delete_stadium(session, stadium_id)
    except LeagueError as e:
        raise to_http_exception(e)
    return None
