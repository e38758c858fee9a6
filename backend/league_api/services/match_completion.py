"""
Daily match completion sweep.

Flips Match.is_completed once a match's end time has passed. The sweep owns
that flag only; generation and edit endpoints own teams and times.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from league_api.config import COMPLETION_SWEEP_HOUR
from league_api.models.match import Match
from league_api.utils.dates import reference_now, start_of_day

logger = logging.getLogger(__name__)


def mark_completed_matches(session: Session, now: Optional[datetime] = None) -> int:
    """Mark every unfinished match whose end_date is before ``now``. Returns the count."""
    now = now or reference_now()
    matches = session.exec(
        select(Match).where(Match.is_completed == False, Match.end_date < now)  # noqa: E712
    ).all()
    for match in matches:
        match.is_completed = True
        session.add(match)
    session.commit()

    logger.info("Completion sweep marked %d matches completed", len(matches))
    return len(matches)


def seconds_until_next_run(now: datetime, hour: int = 0) -> float:
    """Delay from ``now`` until the next ``hour``:00 (always > 0)."""
    next_run = start_of_day(now.date()) + timedelta(hours=hour)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


async def run_completion_sweep_forever(engine: Engine, hour: int = COMPLETION_SWEEP_HOUR) -> None:
    """Run the sweep once a day until cancelled. Any sweep failure is logged and retried next day."""
    while True:
        await asyncio.sleep(seconds_until_next_run(reference_now(), hour))
        try:
            with Session(engine) as session:
                mark_completed_matches(session)
        except Exception:
            logger.exception("Completion sweep failed")
