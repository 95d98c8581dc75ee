# app/models/__init__.py
from app.models.base import Base  # noqa: F401

from app.models.user import User  # noqa: F401
from app.models.trip import Trip, trip_members  # noqa: F401
from app.models.availability import Availability, AvailabilityStatus  # noqa: F401
