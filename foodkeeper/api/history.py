"""History API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from foodkeeper.database import get_db
from foodkeeper.models.enums import HistoryRecordType
from foodkeeper.schemas.history import (
    CleanupResponse,
    HistoryRecordResponse,
    HistoryStatisticsResponse,
    RecipeTrialCreate,
)
from foodkeeper.services.history_service import HistoryService

router = APIRouter(prefix="/api/v1/history", tags=["history"])


@router.get("/records", response_model=list[HistoryRecordResponse])
def list_records(
    db: Annotated[Session, Depends(get_db)],
    start: date | None = None,
    end: date | None = None,
    record_type: Annotated[HistoryRecordType | None, Query(alias="type")] = None,
):
    """Records between two dates (both inclusive), newest first."""
    return HistoryService(db).get_records(start, end, record_type)


@router.get("/statistics", response_model=HistoryStatisticsResponse)
def read_statistics(
    db: Annotated[Session, Depends(get_db)],
    start: date | None = None,
    end: date | None = None,
):
    return HistoryService(db).get_statistics(start, end)


@router.post("/recipe-trials", response_model=HistoryRecordResponse, status_code=status.HTTP_201_CREATED)
def record_recipe_trial(data: RecipeTrialCreate, db: Annotated[Session, Depends(get_db)]):
    return HistoryService(db).record_recipe_trial(data.recipe_name, data.notes)


@router.delete("/records", response_model=CleanupResponse)
def clear_records(
    db: Annotated[Session, Depends(get_db)],
    before: date | None = None,
):
    """Delete records before a date, or every record when no date is given."""
    service = HistoryService(db)
    deleted = service.clear_records_before(before) if before else service.clear_all_records()
    return CleanupResponse(deleted=deleted)


@router.post("/cleanup", response_model=CleanupResponse)
def auto_cleanup(db: Annotated[Session, Depends(get_db)]):
    """Drop records older than the retention window."""
    return CleanupResponse(deleted=HistoryService(db).perform_auto_cleanup())
