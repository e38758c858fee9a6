"""
League error taxonomy.

Services raise these; routers translate them to HTTP responses.
"""

from typing import Optional


class LeagueError(Exception):
    """Base exception for league operations"""

    pass


class NotFoundError(LeagueError):
    """Referenced league, season, team, match, round or stadium does not exist"""

    pass


class ValidationError(LeagueError):
    """Input rejected before any mutation.

    ``code`` identifies which precondition failed, e.g. ``not-enough-participants``,
    ``wrong-count``, ``invalid-date``.
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code or "invalid"
        self.message = message

    def to_dict(self):
        return {"code": self.code, "message": self.message}


class ConflictError(LeagueError):
    """Uniqueness rule violated (e.g. stadium name collision)"""

    pass


class PersistenceError(LeagueError):
    """Storage operation failed; the transaction was rolled back"""

    pass
