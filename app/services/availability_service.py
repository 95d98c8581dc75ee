# app/services/availability_service.py
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.errors import AccessDenied, AvailabilityError, InvalidInput
from app.models.availability import Availability, AvailabilityStatus
from app.models.user import User
from app.services.access_guard import AccessGuard
from app.services.availability_store import AvailabilityStore
from app.services.calendar_days import candidate_days, day_span, iter_days, parse_calendar_day
from app.services.ranking_service import display_tier, group_percentage, rank_dates

logger = logging.getLogger(__name__)

# Range requests may pass this instead of a status to wipe every day
CLEAR = "clear"


def parse_status(value: Any, allow_clear: bool = False) -> Optional[AvailabilityStatus]:
    """
    Validate a client-supplied status.

    Returns None for "clear" when `allow_clear` is set, meaning "remove my vote".
    """
    if allow_clear and (value is None or value == CLEAR):
        return None
    if value is None or value == "":
        raise InvalidInput("status is required", field="status")
    if isinstance(value, AvailabilityStatus):
        return value
    try:
        return AvailabilityStatus(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in AvailabilityStatus)
        raise InvalidInput(
            f"Invalid status {value!r}, expected one of: {allowed}", field="status"
        ) from e


@dataclass
class RangeApplyResult:
    """
    Outcome of a bulk range vote.

    Days are applied one by one with no rollback, so on failure `applied`
    holds the days that stuck and `remaining` the days never written
    (failed day included). Re-sending `remaining` is safe.
    """

    status: Optional[AvailabilityStatus]
    applied: List[date] = field(default_factory=list)
    remaining: List[date] = field(default_factory=list)
    failed_date: Optional[date] = None
    error: Optional[AvailabilityError] = None

    @property
    def partial(self) -> bool:
        return self.error is not None


@dataclass
class BestDate:
    date: date
    score: int
    percentage: float
    tier: str


@dataclass
class MemberStatus:
    user: User
    status: Optional[AvailabilityStatus]


class AvailabilityService:
    """
    Business logic for reading and changing trip availability votes.

    Every call checks the trip exists (NotFound) and that the caller is
    the owner or a member (AccessDenied) before touching the store.
    Callers may only change their own votes.
    """

    def __init__(
        self,
        db: Session,
        store: Optional[AvailabilityStore] = None,
        guard: Optional[AccessGuard] = None,
    ):
        self.db = db
        self.store = store or AvailabilityStore(db)
        self.guard = guard or AccessGuard(db)
        self.settings = get_settings()

    def get_availability(self, trip_id: int, caller_id: int) -> List[Availability]:
        self.guard.require_read(trip_id, caller_id)
        return self.store.find_all_by_trip(trip_id)

    def set_availability(
        self,
        trip_id: int,
        caller_id: int,
        day: Any,
        status: Any,
        user_id: Optional[int] = None,
    ) -> Availability:
        parsed_day = parse_calendar_day(day)
        parsed_status = parse_status(status)

        self.guard.require_write(trip_id, caller_id)
        _check_owner(caller_id, user_id)

        record = self.store.upsert_by_trip_user_date(
            trip_id, caller_id, parsed_day, parsed_status
        )
        logger.info(
            "availability set trip=%s user=%s date=%s status=%s",
            trip_id, caller_id, parsed_day, parsed_status.value,
        )
        return record

    def clear_availability(
        self,
        trip_id: int,
        caller_id: int,
        day: Any,
        user_id: Optional[int] = None,
    ) -> bool:
        """Remove the caller's vote for `day`. Returns False if there was none."""
        parsed_day = parse_calendar_day(day)

        self.guard.require_write(trip_id, caller_id)
        _check_owner(caller_id, user_id)

        removed = self.store.delete_by_trip_user_date(trip_id, caller_id, parsed_day)
        logger.info(
            "availability cleared trip=%s user=%s date=%s removed=%s",
            trip_id, caller_id, parsed_day, removed,
        )
        return removed

    def apply_status_to_range(
        self,
        trip_id: int,
        caller_id: int,
        start_date: Any,
        end_date: Any,
        status: Any,
    ) -> RangeApplyResult:
        """
        Set (or clear) the caller's vote on every day from start_date to
        end_date inclusive.

        All validation happens before the first write:
          - both dates parse and end_date >= start_date
          - the range sits inside the trip window
          - the range is no longer than AVAILABILITY_MAX_RANGE_DAYS

        Writes are NOT atomic across days. If a day fails, earlier days
        stay applied and the result carries the error and the remaining
        days instead of raising.
        """
        start = parse_calendar_day(start_date, field="start_date")
        end = parse_calendar_day(end_date, field="end_date")
        parsed_status = parse_status(status, allow_clear=True)

        if end < start:
            raise InvalidInput("end_date must not be before start_date", field="end_date")

        trip = self.guard.require_write(trip_id, caller_id)

        if start < trip.start_date or start > trip.end_date:
            raise InvalidInput("start_date is outside the trip dates", field="start_date")
        if end > trip.end_date:
            raise InvalidInput("end_date is outside the trip dates", field="end_date")

        cap = self.settings.AVAILABILITY_MAX_RANGE_DAYS
        if day_span(start, end) > cap:
            raise InvalidInput(f"Range is longer than {cap} days", field="end_date")

        days = list(iter_days(start, end))
        result = RangeApplyResult(status=parsed_status)

        for i, day in enumerate(days):
            try:
                if parsed_status is None:
                    self.store.delete_by_trip_user_date(trip_id, caller_id, day)
                else:
                    self.store.upsert_by_trip_user_date(trip_id, caller_id, day, parsed_status)
            except AvailabilityError as e:
                result.failed_date = day
                result.remaining = days[i:]
                result.error = e
                logger.warning(
                    "range apply stopped trip=%s user=%s at %s: %s (%d of %d days applied)",
                    trip_id, caller_id, day, e.kind, len(result.applied), len(days),
                )
                return result
            result.applied.append(day)

        logger.info(
            "range applied trip=%s user=%s %s..%s status=%s",
            trip_id, caller_id, start, end,
            parsed_status.value if parsed_status else CLEAR,
        )
        return result

    def get_user_status(
        self, trip_id: int, caller_id: int, user_id: int, day: Any
    ) -> Optional[AvailabilityStatus]:
        """The user's vote for `day`, or None for no response."""
        parsed_day = parse_calendar_day(day)
        self.guard.require_read(trip_id, caller_id)

        record = self.store.find_by_trip_and_user_and_date(trip_id, user_id, parsed_day)
        if record is None:
            return None
        return AvailabilityStatus(record.status)

    def get_date_statuses(self, trip_id: int, caller_id: int, day: Any) -> List[MemberStatus]:
        """Every trip member (owner first if not a member) with their vote for `day`."""
        parsed_day = parse_calendar_day(day)
        trip = self.guard.require_read(trip_id, caller_id)

        people = trip.participants

        votes = {
            r.user_id: AvailabilityStatus(r.status)
            for r in self.store.find_all_by_trip(trip_id)
            if r.date == parsed_day
        }
        return [MemberStatus(user=u, status=votes.get(u.id)) for u in people]

    def get_best_dates(
        self, trip_id: int, caller_id: int, top_n: Optional[int] = None
    ) -> List[BestDate]:
        trip = self.guard.require_read(trip_id, caller_id)
        top_n = self.settings.RANKING_TOP_N if top_n is None else top_n

        days = candidate_days(
            trip.start_date, trip.end_date, cap=self.settings.AVAILABILITY_MAX_RANGE_DAYS
        )
        records = self.store.find_all_by_trip(trip_id)
        member_count = len(trip.participants)

        return [
            BestDate(
                date=r.date,
                score=r.score,
                percentage=group_percentage(r.score, member_count),
                tier=display_tier(r.score, member_count),
            )
            for r in rank_dates(days, records, top_n)
        ]


def _check_owner(caller_id: int, user_id: Optional[int]) -> None:
    if user_id is not None and user_id != caller_id:
        raise AccessDenied("You can only change your own availability")
