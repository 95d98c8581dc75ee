# tests/test_db_basic.py
from datetime import date

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from app.db.session import engine
from app.models import Availability, Base
from app.models.availability import AvailabilityStatus


def test_db_can_create_schema():
    Base.metadata.create_all(bind=engine)

    with engine.connect() as conn:
        result = conn.execute(text("SELECT 1"))
        assert result.scalar() == 1


def test_unique_constraint_blocks_duplicate_votes(db, make_user, make_trip):
    owner = make_user("Ana")
    trip = make_trip(owner, date(2025, 1, 1), date(2025, 1, 5))

    db.add(Availability(trip_id=trip.id, user_id=owner.id, date=date(2025, 1, 2), status=AvailabilityStatus.CAN))
    db.commit()

    db.add(Availability(trip_id=trip.id, user_id=owner.id, date=date(2025, 1, 2), status=AvailabilityStatus.MAYBE))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_deleting_trip_removes_its_votes(db, make_user, make_trip):
    owner = make_user("Ana")
    trip = make_trip(owner, date(2025, 1, 1), date(2025, 1, 5))
    db.add(Availability(trip_id=trip.id, user_id=owner.id, date=date(2025, 1, 2), status=AvailabilityStatus.CAN))
    db.commit()

    db.execute(text("DELETE FROM trips WHERE id = :id"), {"id": trip.id})
    db.commit()

    assert db.query(Availability).count() == 0
