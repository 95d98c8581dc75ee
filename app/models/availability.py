# app/models/availability.py
from datetime import datetime
import enum

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from app.models.base import Base


class AvailabilityStatus(str, enum.Enum):
    CAN = "can"
    MAYBE = "maybe"
    CANNOT = "cannot"


class Availability(Base):
    """
    One member's vote for one calendar day of a trip.

    There is no "no response" row: a missing (trip_id, user_id, date)
    row *is* no response, and clearing a vote deletes the row.
    """

    __tablename__ = "availabilities"
    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", "date", name="uq_availability_trip_user_date"),
    )

    id = Column(Integer, primary_key=True, index=True)

    trip_id = Column(
        Integer,
        ForeignKey("trips.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    # Calendar day only, no time and no timezone
    date = Column(Date, nullable=False)

    status = Column(
        Enum(AvailabilityStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    user = relationship("User")
    trip = relationship("Trip", backref="availabilities")
