"""
League Schedule Generator

Builds a single round-robin fixture list for a league:
1. Validate roster size and start date (no side effects on failure)
2. Shuffle teams, pair them with the circle method (BYE for odd rosters)
3. Date each round one week apart: even slots on Saturday, odd slots on Sunday,
   kickoff between 11:00 and 17:00, two hours per match
4. Persist matches and rounds and link them, in one transaction

Planning is pure (plan_schedule); persistence is generate_match_schedule.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from league_api.config import REQUIRED_TEAM_COUNT
from league_api.errors import NotFoundError, PersistenceError, ValidationError
from league_api.models.match import Match
from league_api.models.round import Round
from league_api.models.season import Season
from league_api.services.participants import list_league_teams, require_league
from league_api.utils.dates import (
    SATURDAY,
    SUNDAY,
    add_hours,
    add_weeks,
    parse_start_date,
    reference_now,
    start_of_day,
    week_anchor,
)
from league_api.utils.round_robin import circle_rounds, shuffle

logger = logging.getLogger(__name__)

MATCH_DURATION_HOURS = 2
KICKOFF_EARLIEST_HOUR = 11
KICKOFF_LATEST_HOUR = 17

ONE_WEEK = timedelta(weeks=1)


# ============================================================================
# Plan
# ============================================================================


@dataclass
class PlannedFixture:
    home: Any
    away: Any
    start_date: datetime
    end_date: datetime
    sequence_in_round: int


@dataclass
class PlannedRound:
    number: int  # 1-based
    name: str
    start_date: datetime
    end_date: datetime
    fixtures: List[PlannedFixture] = field(default_factory=list)


@dataclass
class SchedulePlan:
    league_id: int
    season_id: Optional[int]
    rounds: List[PlannedRound]

    @property
    def fixtures(self) -> List[PlannedFixture]:
        return [fixture for planned_round in self.rounds for fixture in planned_round.fixtures]


def validate_participant_count(count: int, required: Optional[int] = None) -> None:
    """
    Raises:
        ValidationError(not-enough-participants) if fewer than 2
        ValidationError(wrong-count) if a fixed roster size is configured and not met
    """
    required = REQUIRED_TEAM_COUNT if required is None else required
    if count < 2:
        raise ValidationError("Not enough teams found to generate schedule", code="not-enough-participants")
    if required and count != required:
        raise ValidationError(f"Number of teams must be {required} for this schedule", code="wrong-count")


def first_round_saturday(start: datetime, now: datetime) -> datetime:
    """
    Saturday (00:00) of the first round.

    Starts from the Saturday of start's ISO week and moves forward in whole weeks
    until the earliest kickoff is neither before ``now`` nor before ``start``
    itself (a date-only start counts from midnight).
    The whole schedule shifts together, so a round's Saturday and Sunday stay in
    the same week.
    """
    saturday = week_anchor(start_of_day(start.date()), SATURDAY)
    lower_bound = max(now, start)

    gap = lower_bound - add_hours(saturday, KICKOFF_EARLIEST_HOUR)
    if gap > timedelta(0):
        saturday = add_weeks(saturday, math.ceil(gap / ONE_WEEK))
    return saturday


def _kickoff(day: datetime, rng: random.Random) -> datetime:
    offset = rng.randint(0, KICKOFF_LATEST_HOUR - KICKOFF_EARLIEST_HOUR)
    return add_hours(day, KICKOFF_EARLIEST_HOUR + offset)


def plan_schedule(
    participants: Sequence[Any],
    start_date: Any,
    league_id: int,
    season_id: Optional[int] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    required_count: Optional[int] = None,
) -> SchedulePlan:
    """
    Plan every round of a single round-robin pass. Nothing is persisted.

    Args:
        participants: Opaque team references (ids in production)
        start_date: date/datetime/ISO string; the first round is played that week
        league_id: League the fixtures belong to
        season_id: Optional season reference copied onto fixtures and rounds
        rng: Random source for the shuffle and kickoff hours
        now: Clock reading used to keep fixtures out of the past
        required_count: Override of REQUIRED_TEAM_COUNT (0 = any count >= 2)

    Returns:
        SchedulePlan with N-1 rounds for even N (N rounds for odd N, one team idle
        per round); BYE pairings are not included in the plan

    Raises:
        ValidationError: roster size or start date rejected
    """
    # Same order as the HTTP contract: roster too small, bad date, wrong size
    if len(participants) < 2:
        raise ValidationError("Not enough teams found to generate schedule", code="not-enough-participants")
    start = parse_start_date(start_date)
    validate_participant_count(len(participants), required_count)

    rng = rng or random.Random()
    now = now or reference_now()

    shuffled = shuffle(participants, rng)
    first_saturday = first_round_saturday(start, now)

    rounds: List[PlannedRound] = []
    for round_index, pairings in enumerate(circle_rounds(shuffled)):
        saturday = add_weeks(first_saturday, round_index)
        sunday = week_anchor(saturday, SUNDAY)

        fixtures: List[PlannedFixture] = []
        for pairing in pairings:
            if pairing.is_bye:
                continue
            kickoff = _kickoff(saturday if pairing.slot % 2 == 0 else sunday, rng)
            fixtures.append(
                PlannedFixture(
                    home=pairing.home,
                    away=pairing.away,
                    start_date=kickoff,
                    end_date=add_hours(kickoff, MATCH_DURATION_HOURS),
                    sequence_in_round=len(fixtures) + 1,
                )
            )

        round_start = min(f.start_date for f in fixtures)
        round_end = max(f.end_date for f in fixtures)
        rounds.append(
            PlannedRound(
                number=round_index + 1,
                name=f"Round {round_index + 1} - {round_start:%b %d, %Y}",
                start_date=round_start,
                end_date=round_end,
                fixtures=fixtures,
            )
        )

    return SchedulePlan(league_id=league_id, season_id=season_id, rounds=rounds)


# ============================================================================
# Persist
# ============================================================================


def generate_match_schedule(
    session: Session,
    league_id: int,
    start_date: Any,
    season_id: Optional[int] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    required_count: Optional[int] = None,
) -> Tuple[List[Match], List[Round]]:
    """
    Generate and store the full match schedule of a league.

    Matches, rounds and the match -> round links are written in a single
    transaction. season_id defaults to the league's current season.

    Raises:
        NotFoundError: league or season does not exist
        ValidationError: roster size or start date rejected
        PersistenceError: storage failed; nothing was written
    """
    league = require_league(session, league_id)

    if season_id is None:
        season_id = league.current_season_id
    elif not session.get(Season, season_id):
        raise NotFoundError("Season not found")

    teams = list_league_teams(session, league_id)
    plan = plan_schedule(
        [team.id for team in teams],
        start_date,
        league_id=league_id,
        season_id=season_id,
        rng=rng,
        now=now,
        required_count=required_count,
    )

    matches: List[Match] = []
    rounds: List[Round] = []
    try:
        matches_by_round: List[List[Match]] = []
        for planned_round in plan.rounds:
            round_matches = [
                Match(
                    league_id=league_id,
                    season_id=season_id,
                    home_team_id=fixture.home,
                    away_team_id=fixture.away,
                    start_date=fixture.start_date,
                    end_date=fixture.end_date,
                    sequence_in_round=fixture.sequence_in_round,
                )
                for fixture in planned_round.fixtures
            ]
            matches_by_round.append(round_matches)
            matches.extend(round_matches)
        session.add_all(matches)
        session.flush()

        rounds = [
            Round(
                name=planned_round.name,
                league_id=league_id,
                season_id=season_id,
                start_date=planned_round.start_date,
                end_date=planned_round.end_date,
            )
            for planned_round in plan.rounds
        ]
        session.add_all(rounds)
        session.flush()

        for round_row, round_matches in zip(rounds, matches_by_round):
            for match in round_matches:
                match.round_id = round_row.id
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to persist schedule for league %d: %s", league_id, exc)
        raise PersistenceError("Failed to save match schedule") from exc

    logger.info(
        "Generated schedule for league %d: %d teams, %d rounds, %d matches",
        league_id,
        len(teams),
        len(rounds),
        len(matches),
    )
    return matches, rounds


def refresh_round_bounds(session: Session, round_id: int) -> Optional[Round]:
    """
    Reset a round's start/end to the earliest start and latest end of its matches.

    Flushes pending match edits first; does not commit.
    """
    session.flush()
    round_row = session.get(Round, round_id)
    if not round_row:
        return None

    session.refresh(round_row, ["matches"])
    if round_row.matches:
        round_row.start_date = min(m.start_date for m in round_row.matches)
        round_row.end_date = max(m.end_date for m in round_row.matches)
        session.add(round_row)
    return round_row


def delete_league_schedule(session: Session, league_id: int) -> int:
    """
    Delete every match and round of a league in one transaction.

    Returns:
        Number of matches deleted
    """
    require_league(session, league_id)

    matches = session.exec(select(Match).where(Match.league_id == league_id)).all()
    rounds = session.exec(select(Round).where(Round.league_id == league_id)).all()
    try:
        for match in matches:
            session.delete(match)
        session.flush()
        for round_row in rounds:
            session.delete(round_row)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to delete schedule for league %d: %s", league_id, exc)
        raise PersistenceError("Failed to delete match schedule") from exc

    logger.info("Deleted schedule for league %d: %d matches, %d rounds", league_id, len(matches), len(rounds))
    return len(matches)
