# app/services/access_guard.py
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.errors import AccessDenied, NotFound, store_call
from app.models.trip import Trip


@dataclass(frozen=True)
class TripAccess:
    read: bool
    write: bool


NO_ACCESS = TripAccess(read=False, write=False)
MEMBER_ACCESS = TripAccess(read=True, write=True)


class AccessGuard:
    """
    Answers "may this caller touch this trip's availability?".

    The trip is looked up first so a missing trip is always NotFound,
    whatever the caller's rights would have been.
    """

    def __init__(self, db: Session):
        self.db = db

    @store_call
    def load_trip(self, trip_id: int) -> Trip:
        trip = self.db.get(Trip, trip_id)
        if trip is None:
            raise NotFound("Trip not found")
        return trip

    def can_access(self, trip: Trip, caller_id: int) -> TripAccess:
        # Owner or member: full access. No read-only role yet.
        if trip.owner_id == caller_id or caller_id in trip.member_ids:
            return MEMBER_ACCESS
        return NO_ACCESS

    @store_call
    def require_read(self, trip_id: int, caller_id: int) -> Trip:
        trip = self.load_trip(trip_id)
        if not self.can_access(trip, caller_id).read:
            raise AccessDenied("Access denied")
        return trip

    @store_call
    def require_write(self, trip_id: int, caller_id: int) -> Trip:
        trip = self.load_trip(trip_id)
        if not self.can_access(trip, caller_id).write:
            raise AccessDenied("Access denied")
        return trip
