# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from league_api.models.league import League  # noqa: F401
from league_api.models.match import Match  # noqa: F401
from league_api.models.round import Round  # noqa: F401
from league_api.models.season import Season  # noqa: F401
from league_api.models.stadium import Stadium  # noqa: F401
from league_api.models.team import Team  # noqa: F401
