from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from quiz_api.core.database import get_db
from quiz_api.core.dependencies import get_current_user_id
from quiz_api.schemas.history import (
    HistoryDetailResponse,
    HistorySummaryResponse,
    UserStatsResponse,
)
from quiz_api.services.history import HistoryService

router = APIRouter(tags=["history"], prefix="/users/me")


@router.get(
    "/assessments",
    response_model=List[HistorySummaryResponse],
    status_code=status.HTTP_200_OK,
)
def list_assessments(
    scenario: Optional[str] = Query(None, description="Only attempts of this scenario"),
    difficulty: Optional[str] = Query(None, description="Only attempts with this difficulty"),
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List the caller's completed attempts with their scores"""
    service = HistoryService(db)
    return service.list_summaries(user_id, scenario, difficulty, start_date, end_date)


@router.get(
    "/assessments/{history_id}",
    response_model=HistoryDetailResponse,
    status_code=status.HTTP_200_OK,
)
def get_assessment(
    history_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get one of the caller's attempts with every answered question"""
    service = HistoryService(db)
    return service.get_details(user_id, history_id)


@router.get("/stats", response_model=UserStatsResponse, status_code=status.HTTP_200_OK)
def get_stats(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    service = HistoryService(db)
    return service.get_user_stats(user_id)
