# app/services/availability_store.py
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, joinedload

from app.core.errors import store_call
from app.models.availability import Availability, AvailabilityStatus

_UPSERT_DIALECTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class AvailabilityStore:
    """
    Keyed storage for availability votes.

    Every write is keyed on (trip_id, user_id, date). Upserts go through
    INSERT ... ON CONFLICT so concurrent votes for the same key resolve to
    last-writer-wins instead of a duplicate row.
    """

    def __init__(self, db: Session):
        self.db = db

    @store_call
    def find_by_trip_and_user_and_date(
        self, trip_id: int, user_id: int, day: date
    ) -> Optional[Availability]:
        return (
            self.db.query(Availability)
            .filter(
                Availability.trip_id == trip_id,
                Availability.user_id == user_id,
                Availability.date == day,
            )
            .first()
        )

    @store_call
    def find_all_by_trip(self, trip_id: int) -> List[Availability]:
        return (
            self.db.query(Availability)
            .options(joinedload(Availability.user))
            .filter(Availability.trip_id == trip_id)
            .order_by(Availability.date.asc(), Availability.user_id.asc())
            .all()
        )

    @store_call
    def upsert_by_trip_user_date(
        self,
        trip_id: int,
        user_id: int,
        day: date,
        status: AvailabilityStatus,
    ) -> Availability:
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"No atomic upsert available for dialect {dialect!r}")

        now = datetime.utcnow()
        stmt = insert(Availability).values(
            trip_id=trip_id,
            user_id=user_id,
            date=day,
            status=status,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["trip_id", "user_id", "date"],
            set_={
                "status": stmt.excluded.status,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        self.db.execute(stmt)
        self.db.commit()

        # Re-read through the ORM so callers get the stored row, voter included
        row = (
            self.db.query(Availability)
            .options(joinedload(Availability.user))
            .filter(
                Availability.trip_id == trip_id,
                Availability.user_id == user_id,
                Availability.date == day,
            )
            .populate_existing()
            .one()
        )
        return row

    @store_call
    def delete_by_trip_user_date(self, trip_id: int, user_id: int, day: date) -> bool:
        result = self.db.execute(
            delete(Availability).where(
                Availability.trip_id == trip_id,
                Availability.user_id == user_id,
                Availability.date == day,
            )
        )
        self.db.commit()
        return (result.rowcount or 0) > 0
