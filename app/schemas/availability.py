# app/schemas/availability.py
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from app.models.availability import AvailabilityStatus


# Request bodies keep fields optional and untyped so the service can report
# which one is missing or malformed (e.g. a number for a date) as a 400
# invalid_input instead of a 422.
class SetAvailabilityPayload(BaseModel):
    date: Optional[Any] = None
    status: Optional[Any] = None
    user_id: Optional[int] = None


class ClearAvailabilityPayload(BaseModel):
    date: Optional[Any] = None
    user_id: Optional[int] = None


class RangeAvailabilityPayload(BaseModel):
    start_date: Optional[Any] = None
    end_date: Optional[Any] = None
    # can | maybe | cannot | clear
    status: Optional[Any] = None


class VoterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class AvailabilityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    trip_id: int
    user_id: int
    user: Optional[VoterOut] = None
    date: date
    status: AvailabilityStatus
    created_at: datetime
    updated_at: datetime


class RangeApplyOut(BaseModel):
    status: Optional[AvailabilityStatus]
    applied: List[date]
    remaining: List[date]
    partial: bool
    failed_date: Optional[date] = None
    error: Optional[dict] = None


class BestDateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    score: int
    percentage: float
    tier: str


class MemberStatusOut(BaseModel):
    user: VoterOut
    status: Optional[AvailabilityStatus] = None
