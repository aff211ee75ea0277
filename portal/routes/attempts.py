"""Attempt read-back endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from portal.database import get_db
from portal.models import AttemptDetail
from portal.services.attempt_service import get_attempt

router = APIRouter(prefix="/api/attempts", tags=["attempts"])


@router.get("/{attempt_id}", response_model=AttemptDetail)
def read_attempt(
    attempt_id: int,
    db: Annotated[DbSession, Depends(get_db)],
) -> object:
    """Get a recorded attempt."""
    return get_attempt(db, attempt_id)
