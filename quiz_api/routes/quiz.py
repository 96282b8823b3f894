from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from quiz_api.core.config import Settings
from quiz_api.core.database import get_db
from quiz_api.core.dependencies import (
    get_app_settings,
    get_current_user_id,
    get_feedback_service,
)
from quiz_api.core.errors import NotFoundError
from quiz_api.schemas.quiz import QuestionResponse, QuizAttemptResult
from quiz_api.services.feedback import FeedbackService
from quiz_api.services.quiz import QuizService

router = APIRouter(tags=["quiz"], prefix="/quiz")


@router.get(
    "/questions",
    response_model=List[QuestionResponse],
    status_code=status.HTTP_200_OK,
)
def get_questions(
    scenario_id: Optional[str] = Query(None, description="ID of the scenario"),
    question_difficulty_id: Optional[str] = Query(None, description="Only this difficulty"),
    limit: Optional[str] = Query(None, description="Maximum number of questions"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    feedback_service: FeedbackService = Depends(get_feedback_service),
):
    """
    Get a random set of questions for a scenario

    Each question comes with its options and their point values. The
    selection is randomized on every call.

    Raises:
        400 if scenario_id is missing or any parameter is not a number,
        404 if no question matches
    """
    service = QuizService(db, settings, feedback_service)
    questions = service.get_questions(scenario_id, question_difficulty_id, limit)
    if not questions:
        raise NotFoundError("No questions found for the given criteria.")
    return questions


@router.post(
    "/attempts",
    response_model=QuizAttemptResult,
    status_code=status.HTTP_201_CREATED,
)
def submit_attempt(
    attempt: Any = Body(...),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    feedback_service: FeedbackService = Depends(get_feedback_service),
):
    """
    Submit the options selected during a quiz attempt

    Body: {"scenario_id": int, "selected_options": [{"question_id": int, "option_id": int}, ...]}

    The attempt is scored and stored as a history record. Nothing is stored
    when any option id is invalid.
    """
    service = QuizService(db, settings, feedback_service)
    return service.submit_attempt(user_id, attempt)
