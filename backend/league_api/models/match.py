from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from league_api.models.league import League
    from league_api.models.round import Round
    from league_api.models.season import Season
    from league_api.models.team import Team


class Match(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    league_id: int = Field(foreign_key="league.id", index=True)
    season_id: Optional[int] = Field(default=None, foreign_key="season.id")
    home_team_id: int = Field(foreign_key="team.id", index=True)
    away_team_id: int = Field(foreign_key="team.id", index=True)

    # Set once, after the round rows exist
    round_id: Optional[int] = Field(default=None, foreign_key="round.id", index=True)
    sequence_in_round: Optional[int] = Field(default=None)  # 1-based position within the round

    start_date: datetime
    end_date: datetime  # start_date + 2 hours

    # Owned by the daily completion sweep
    is_completed: bool = Field(default=False)
    is_result_approved: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    league: "League" = Relationship(back_populates="matches")
    season: Optional["Season"] = Relationship()
    round: Optional["Round"] = Relationship(back_populates="matches")
    home_team: "Team" = Relationship(
        back_populates="home_matches", sa_relationship_kwargs={"foreign_keys": "Match.home_team_id"}
    )
    away_team: "Team" = Relationship(
        back_populates="away_matches", sa_relationship_kwargs={"foreign_keys": "Match.away_team_id"}
    )
