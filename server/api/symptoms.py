# server/api/symptoms.py

import calendar
import logging
from datetime import date, datetime, time
from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError
from fastapi import APIRouter, HTTPException, Query, status, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from database import get_db
from models.symptom import SymptomLog
from core.deps import get_identity
from core.security import Identity
from core.summaries import generate_summary


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/symptoms", tags=["symptoms"])

MIN_SYMPTOM_LENGTH = 10


class SymptomRequest(BaseModel):
    input: str

    @field_validator("input")
    @classmethod
    def check_length(cls, value: str) -> str:
        if len(value) < MIN_SYMPTOM_LENGTH:
            raise PydanticCustomError(
                "symptom_too_short",
                "Symptom description must be at least 10 characters long",
            )
        return value


def monthly_counts(timestamps, year: int) -> list[dict]:
    """
    Buckets timestamps by month of the given year.
    Always returns twelve entries, Jan..Dec, zero-filled.
    """
    counts = [0] * 12
    for ts in timestamps:
        if ts.year == year:
            counts[ts.month - 1] += 1
    return [
        {"date": calendar.month_abbr[month], "count": counts[month - 1]}
        for month in range(1, 13)
    ]


# -------------------------------
# Endpoints
# -------------------------------

@router.get("/analytics")
def analytics(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    """
    Monthly log counts for the caller over the current calendar year.
    """
    year_start = datetime(datetime.now().year, 1, 1)
    try:
        rows = (
            db.query(SymptomLog.created_at)
            .filter(SymptomLog.user_id == identity.user_id)
            .filter(SymptomLog.created_at >= year_start)
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Error in /analytics")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch analytics data"
        )

    return monthly_counts((r.created_at for r in rows), year_start.year)


@router.get("/logs")
def list_logs(
    day: date | None = Query(default=None, alias="date"),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """
    The caller's symptom logs, newest first.
    With ?date=YYYY-MM-DD only logs from that calendar day are returned.
    """
    query = db.query(SymptomLog).filter(SymptomLog.user_id == identity.user_id)
    if day is not None:
        start = datetime.combine(day, time.min)
        end = datetime.combine(day, time.max)
        query = query.filter(SymptomLog.created_at >= start, SymptomLog.created_at <= end)

    try:
        logs = query.order_by(SymptomLog.created_at.desc()).all()
    except SQLAlchemyError:
        logger.exception("Error fetching logs")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch symptom logs"
        )

    return [log.to_dict() for log in logs]


@router.post("")
def log_symptoms(
    req: SymptomRequest,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    summary = generate_summary(req.input)
    try:
        db.add(SymptomLog(user_id=identity.user_id, input=req.input, ai_response=summary))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error in POST /symptoms")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to log symptoms")

    return {"summary": summary}
