# app/routers/availability.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from app.core.errors import AvailabilityError, domain_error_to_http
from app.routers.deps import get_availability_service, get_caller_id
from app.schemas.availability import (
    AvailabilityOut,
    BestDateOut,
    ClearAvailabilityPayload,
    MemberStatusOut,
    RangeApplyOut,
    RangeAvailabilityPayload,
    SetAvailabilityPayload,
    VoterOut,
)
from app.services.availability_service import AvailabilityService
from app.services.calendar_days import parse_calendar_day

router = APIRouter(prefix="/trips/{trip_id}/availability", tags=["availability"])


@router.get("")
def list_availability(
        trip_id: int,
        caller_id: int = Depends(get_caller_id),
        service: AvailabilityService = Depends(get_availability_service),
) -> Dict[str, Any]:
    """
    Every vote on the trip, with voter name/email.

    Clients rebuild per-day and per-member views from this list.
    """
    try:
        records = service.get_availability(trip_id, caller_id)
    except AvailabilityError as e:
        raise domain_error_to_http(e)

    return {
        "availabilities": [AvailabilityOut.model_validate(r) for r in records],
    }


@router.post("")
def set_availability(
        trip_id: int,
        payload: SetAvailabilityPayload,
        caller_id: int = Depends(get_caller_id),
        service: AvailabilityService = Depends(get_availability_service),
) -> Dict[str, Any]:
    try:
        record = service.set_availability(
            trip_id,
            caller_id,
            payload.date,
            payload.status,
            user_id=payload.user_id,
        )
    except AvailabilityError as e:
        raise domain_error_to_http(e)

    return {"availability": AvailabilityOut.model_validate(record)}


@router.delete("")
def clear_availability(
        trip_id: int,
        payload: ClearAvailabilityPayload,
        caller_id: int = Depends(get_caller_id),
        service: AvailabilityService = Depends(get_availability_service),
) -> Dict[str, Any]:
    """
    Back to "no response" for one day. Clearing a day with no vote is fine.
    """
    try:
        removed = service.clear_availability(
            trip_id, caller_id, payload.date, user_id=payload.user_id
        )
    except AvailabilityError as e:
        raise domain_error_to_http(e)

    return {"message": "Availability cleared", "removed": removed}


@router.post("/range")
def apply_range(
        trip_id: int,
        payload: RangeAvailabilityPayload,
        caller_id: int = Depends(get_caller_id),
        service: AvailabilityService = Depends(get_availability_service),
) -> RangeApplyOut:
    """
    Apply one status (or "clear") to every day of a range.

    Bad input fails before anything is written. A store failure halfway
    does not undo the days already written: the response lists what was
    applied, what remains and the error, with partial=true.
    """
    try:
        result = service.apply_status_to_range(
            trip_id,
            caller_id,
            payload.start_date,
            payload.end_date,
            payload.status,
        )
    except AvailabilityError as e:
        raise domain_error_to_http(e)

    return RangeApplyOut(
        status=result.status,
        applied=result.applied,
        remaining=result.remaining,
        partial=result.partial,
        failed_date=result.failed_date,
        error=result.error.to_dict() if result.error else None,
    )


@router.get("/best-dates")
def best_dates(
        trip_id: int,
        top_n: Optional[int] = Query(default=None),
        caller_id: int = Depends(get_caller_id),
        service: AvailabilityService = Depends(get_availability_service),
) -> Dict[str, Any]:
    try:
        ranked = service.get_best_dates(trip_id, caller_id, top_n=top_n)
    except AvailabilityError as e:
        raise domain_error_to_http(e)

    return {
        "trip_id": trip_id,
        "best_dates": [BestDateOut.model_validate(b) for b in ranked],
    }


@router.get("/dates/{day}")
def date_statuses(
        trip_id: int,
        day: str,
        caller_id: int = Depends(get_caller_id),
        service: AvailabilityService = Depends(get_availability_service),
) -> Dict[str, Any]:
    """One row per trip member with their vote for `day` (null = no response)."""
    try:
        parsed_day = parse_calendar_day(day)
        rows = service.get_date_statuses(trip_id, caller_id, parsed_day)
    except AvailabilityError as e:
        raise domain_error_to_http(e)

    return {
        "date": parsed_day,
        "members": [
            MemberStatusOut(user=VoterOut.model_validate(r.user), status=r.status)
            for r in rows
        ],
    }


@router.get("/users/{user_id}/dates/{day}")
def user_status(
        trip_id: int,
        user_id: int,
        day: str,
        caller_id: int = Depends(get_caller_id),
        service: AvailabilityService = Depends(get_availability_service),
) -> Dict[str, Any]:
    try:
        parsed_day = parse_calendar_day(day)
        status = service.get_user_status(trip_id, caller_id, user_id, parsed_day)
    except AvailabilityError as e:
        raise domain_error_to_http(e)

    return {"user_id": user_id, "date": parsed_day, "status": status}
