# app/models/trip.py
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from app.models.base import Base


trip_members = Table(
    "trip_members",
    Base.metadata,
    Column("trip_id", Integer, ForeignKey("trips.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Trip(Base):
    """
    Shared planning context: an owner, a member set and a travel window.

    Trip CRUD lives elsewhere; this service only reads trips to check
    access and to know which days can be voted on.
    """

    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=True)

    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Inclusive travel window, calendar days
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    owner = relationship("User", foreign_keys=[owner_id])
    members = relationship("User", secondary=trip_members, order_by="User.id")

    @property
    def member_ids(self) -> set:
        return {m.id for m in self.members}

    @property
    def participants(self) -> list:
        """Members plus the owner (first) when the owner isn't in the member list."""
        people = list(self.members)
        if self.owner is not None and self.owner_id not in {m.id for m in people}:
            people.insert(0, self.owner)
        return people
