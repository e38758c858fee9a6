from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from league_api.models.match import Match
    from league_api.models.round import Round
    from league_api.models.season import Season
    from league_api.models.team import Team


class League(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    current_season_id: Optional[int] = Field(default=None, foreign_key="season.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    current_season: Optional["Season"] = Relationship()
    teams: List["Team"] = Relationship(back_populates="league")
    matches: List["Match"] = Relationship(back_populates="league")
    rounds: List["Round"] = Relationship(back_populates="league")
