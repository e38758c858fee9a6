from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from league_api.models.league import League
    from league_api.models.match import Match


class Team(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("league_id", "name", name="uq_league_team_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    league_id: int = Field(foreign_key="league.id", index=True)
    name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    league: "League" = Relationship(back_populates="teams")
    home_matches: List["Match"] = Relationship(
        back_populates="home_team", sa_relationship_kwargs={"foreign_keys": "Match.home_team_id"}
    )
    away_matches: List["Match"] = Relationship(
        back_populates="away_team", sa_relationship_kwargs={"foreign_keys": "Match.away_team_id"}
    )
