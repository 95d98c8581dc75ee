# app/routers/deps.py
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.availability_service import AvailabilityService


def get_caller_id(x_user_id: Optional[int] = Header(default=None)) -> int:
    """
    Identity of the already-authenticated caller.

    Login/session handling sits in front of this API and forwards the
    user id in the X-User-Id header.
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)
