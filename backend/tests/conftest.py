import os

# Must be set before league_api is imported: keep app startup off the real
# database and don't start the daily sweep task.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("COMPLETION_SWEEP_ENABLED", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from league_api.database import get_session  # noqa: E402
from league_api.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. All models MUST be imported before create_all() (see session_fixture)
# 4. App dependency overridden to use test_engine (see client_fixture)
# 5. Tables dropped after every test so counts never leak between tests
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on a fresh schema"""
    # Import all models to ensure they're registered BEFORE create_all
    from league_api.models.league import League  # noqa: F401
    from league_api.models.match import Match  # noqa: F401
    from league_api.models.round import Round  # noqa: F401
    from league_api.models.season import Season  # noqa: F401
    from league_api.models.stadium import Stadium  # noqa: F401
    from league_api.models.team import Team  # noqa: F401

    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override MUST be set BEFORE TestClient() and stay in place
    for the entire duration. This ensures the app never uses its own engine.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(name="league_factory")
def league_factory_fixture(session: Session):
    """Create a league (with a current season) and ``team_count`` teams; returns (league, teams)."""
    from league_api.models.league import League
    from league_api.models.season import Season
    from league_api.models.team import Team

    def _create(team_count: int = 16, name: str = "Premier"):
        season = Season(name="2099")
        session.add(season)
        session.commit()
        session.refresh(season)

        league = League(name=name, current_season_id=season.id)
        session.add(league)
        session.commit()
        session.refresh(league)

        teams = [Team(league_id=league.id, name=f"Team {i + 1:02d}") for i in range(team_count)]
        session.add_all(teams)
        session.commit()
        for team in teams:
            session.refresh(team)
        return league, teams

    return _create
