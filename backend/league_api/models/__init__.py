from league_api.models.league import League
from league_api.models.match import Match
from league_api.models.round import Round
from league_api.models.season import Season
from league_api.models.stadium import Stadium
from league_api.models.team import Team

__all__ = [
    "League",
    "Season",
    "Team",
    "Match",
    "Round",
    "Stadium",
]
