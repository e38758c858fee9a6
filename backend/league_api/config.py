"""
Runtime configuration read from the environment (and a local .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./league.db")
SQL_ECHO = _env_bool("SQL_ECHO", "false")

# Wall-clock zone all match datetimes are expressed in (stored naive)
LEAGUE_TIMEZONE = os.getenv("LEAGUE_TIMEZONE", "UTC")

# Product policy: exact number of teams a league needs before a schedule can be
# generated. 0 means any count >= 2 (odd counts get a bye each round).
REQUIRED_TEAM_COUNT = _env_int("REQUIRED_TEAM_COUNT", 16)

COMPLETION_SWEEP_ENABLED = _env_bool("COMPLETION_SWEEP_ENABLED", "true")
COMPLETION_SWEEP_HOUR = _env_int("COMPLETION_SWEEP_HOUR", 0)
