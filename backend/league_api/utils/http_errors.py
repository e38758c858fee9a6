"""
Translate league service errors into HTTP responses.
"""

from fastapi import HTTPException

from league_api.errors import ConflictError, LeagueError, NotFoundError, PersistenceError, ValidationError


def to_http_exception(exc: LeagueError) -> HTTPException:
    """
    NotFoundError -> 404
    ValidationError -> 400 with {"code", "message"}
    ConflictError -> 409
    PersistenceError and anything else -> 500 without internals
    """
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=exc.to_dict())
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, PersistenceError):
        return HTTPException(status_code=500, detail=str(exc))
    return HTTPException(status_code=500, detail="Internal server error")
