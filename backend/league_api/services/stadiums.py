"""
Stadium registry with unique names.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from league_api.errors import ConflictError, NotFoundError, PersistenceError
from league_api.models.stadium import Stadium

logger = logging.getLogger(__name__)


def find_stadium_by_name(session: Session, name: str) -> Optional[Stadium]:
    return session.exec(select(Stadium).where(Stadium.name == name)).first()


def is_stadium_name_available(session: Session, name: str, is_edit: bool = False) -> bool:
    """Edits always pass (the edit endpoint re-checks on save)."""
    if is_edit:
        return True
    return find_stadium_by_name(session, name) is None


def create_stadium(session: Session, name: str, city: Optional[str] = None, capacity: Optional[int] = None) -> Stadium:
    if find_stadium_by_name(session, name):
        raise ConflictError(f"Stadium name '{name}' already exists")

    stadium = Stadium(name=name, city=city, capacity=capacity)
    session.add(stadium)
    _commit(session, name)
    session.refresh(stadium)
    return stadium


def update_stadium(session: Session, stadium_id: int, changes: dict) -> Stadium:
    """
    Apply changes to a stadium. The route's request model limits the keys.

    Raises:
        NotFoundError: unknown stadium
        ConflictError: new name already taken
        PersistenceError: any other constraint failure on save
    """
    stadium = session.get(Stadium, stadium_id)
    if not stadium:
        raise NotFoundError("Stadium not found")

    new_name = changes.get("name")
    if new_name and new_name != stadium.name and find_stadium_by_name(session, new_name):
        raise ConflictError("Stadium name already exists!")

    for key, value in changes.items():
        setattr(stadium, key, value)
    session.add(stadium)
    _commit(session, stadium.name)
    session.refresh(stadium)
    return stadium


def delete_stadium(session: Session, stadium_id: int) -> None:
    stadium = session.get(Stadium, stadium_id)
    if not stadium:
        raise NotFoundError("Stadium not found")
    session.delete(stadium)
    session.commit()


def _commit(session: Session, name: Optional[str]) -> None:
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        # Only a unique violation means the name lost a race to a concurrent insert
        if "unique" in str(exc.orig).lower():
            raise ConflictError(f"Stadium name '{name}' already exists") from exc
        logger.exception("Failed to save stadium %r", name)
        raise PersistenceError("Failed to save stadium") from exc
