from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from league_api.models.league import League
    from league_api.models.match import Match
    from league_api.models.season import Season


class Round(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str  # "Round 1 - Jan 10, 2099"
    league_id: int = Field(foreign_key="league.id", index=True)
    season_id: Optional[int] = Field(default=None, foreign_key="season.id")
    start_date: datetime  # earliest fixture start
    end_date: datetime  # latest fixture end
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    league: "League" = Relationship(back_populates="rounds")
    season: Optional["Season"] = Relationship()
    matches: List["Match"] = Relationship(
        back_populates="round", sa_relationship_kwargs={"order_by": "Match.sequence_in_round"}
    )
