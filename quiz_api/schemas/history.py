from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from quiz_api.schemas.quiz import OptionResponse


class HistorySummaryResponse(BaseModel):
    history_id: int
    timestamp: datetime
    feedback: Optional[str] = None
    scenario_id: Optional[int] = None
    scenario_name: Optional[str] = None
    total_score: int = 0
    question_count: int = 0


class HistoryQuestionResponse(BaseModel):
    question_id: int
    question_text: str
    selected_option_id: int
    points_awarded: int
    options: List[OptionResponse] = []


class HistoryDetailResponse(BaseModel):
    history_id: int
    user_id: int
    timestamp: datetime
    feedback: Optional[str] = None
    scenario_id: Optional[int] = None
    scenario_name: Optional[str] = None
    total_score: int = 0
    questions: List[HistoryQuestionResponse] = []


class UserStatsResponse(BaseModel):
    user_id: int
    attempt_count: int = Field(0, description="Number of completed attempts")
    total_score: int = 0
    average_score: float = 0.0
    best_score: Optional[int] = None
