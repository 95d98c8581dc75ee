# tests/conftest.py
import os

# Must be set before app.config builds its settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_app.db")

from datetime import date
from typing import Iterable, Optional

import pytest
from sqlalchemy.orm import Session

from app.db.session import engine, SessionLocal
from app.models import Base, Availability, Trip, User, trip_members


def _clean_db():
    db: Session = SessionLocal()
    try:
        db.query(Availability).delete()
        db.execute(trip_members.delete())
        db.query(Trip).delete()
        db.query(User).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    _clean_db()

    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(name: Optional[str] = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(name=name or f"Member {n}", email=f"member{n}@example.com")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_trip(db):
    def _make(
        owner: User,
        start: date,
        end: date,
        members: Iterable[User] = (),
        name: str = "Lisbon",
        owner_is_member: bool = True,
    ) -> Trip:
        trip = Trip(
            name=name,
            destination="Lisbon, PT",
            owner_id=owner.id,
            start_date=start,
            end_date=end,
        )
        others = [m for m in members if m.id != owner.id]
        trip.members = [owner] + others if owner_is_member else others
        db.add(trip)
        db.commit()
        db.refresh(trip)
        return trip

    return _make
