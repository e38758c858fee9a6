"""
Participant directory: the teams registered in a league.
"""

from typing import List

from sqlmodel import Session, select

from league_api.errors import NotFoundError
from league_api.models.league import League
from league_api.models.team import Team


def require_league(session: Session, league_id: int) -> League:
    league = session.get(League, league_id)
    if not league:
        raise NotFoundError("League not found")
    return league


def list_league_teams(session: Session, league_id: int) -> List[Team]:
    """Teams of a league in id order (deterministic input to the shuffle).

    Does not check that the league exists; callers use require_league first.
    """
    return list(session.exec(select(Team).where(Team.league_id == league_id).order_by(Team.id)).all())
