from datetime import date
from typing import Any, Dict, Optional

from quiz_api.core.errors import ValidationError
from quiz_api.domain.quiz_domain import QuizDomain
from quiz_api.models.history import History
from quiz_api.schemas.history import (
    HistoryDetailResponse,
    HistoryQuestionResponse,
    HistorySummaryResponse,
    UserStatsResponse,
)


class HistoryDomain:
    """Domain logic for reviewing completed attempts"""

    @staticmethod
    def parse_date(value: Any, field: str) -> Optional[date]:
        if value is None or value == "":
            return None
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value).strip())
        except ValueError:
            raise ValidationError(f"{field} must be a date in YYYY-MM-DD format")

    @staticmethod
    def to_summary(row, scenario_names: Dict[int, str]) -> HistorySummaryResponse:
        return HistorySummaryResponse(
            history_id=row.history_id,
            timestamp=row.timestamp,
            feedback=row.feedback,
            scenario_id=row.scenario_id,
            scenario_name=scenario_names.get(row.scenario_id),
            total_score=int(row.total_score or 0),
            question_count=int(row.question_count or 0),
        )

    @staticmethod
    def to_detail(history: History) -> HistoryDetailResponse:
        """Convert a History model with its lines to a HistoryDetailResponse"""
        questions = []
        scenario = None
        for line in history.lines:
            question = line.question
            scenario = scenario or question.scenario
            options = [QuizDomain.option_to_response(o) for o in question.options]
            awarded = next((o.points for o in options if o.option_id == line.option_id), 0)
            questions.append(
                HistoryQuestionResponse(
                    question_id=question.id,
                    question_text=question.question_text,
                    selected_option_id=line.option_id,
                    points_awarded=awarded,
                    options=options,
                )
            )

        return HistoryDetailResponse(
            history_id=history.id,
            user_id=history.user_id,
            timestamp=history.timestamp,
            feedback=history.feedback,
            scenario_id=scenario.id if scenario else None,
            scenario_name=scenario.scenario_name if scenario else None,
            total_score=sum(q.points_awarded for q in questions),
            questions=questions,
        )

    @staticmethod
    def to_stats(user_id: int, row) -> UserStatsResponse:
        attempt_count = int(row.attempt_count or 0)
        return UserStatsResponse(
            user_id=user_id,
            attempt_count=attempt_count,
            total_score=int(row.total_score or 0),
            average_score=round(float(row.average_score), 2) if attempt_count else 0.0,
            best_score=int(row.best_score) if attempt_count else None,
        )
