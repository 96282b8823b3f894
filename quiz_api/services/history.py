import logging
from typing import Any, List

from sqlalchemy.orm import Session

from quiz_api.core.errors import NotFoundError, ValidationError
from quiz_api.domain.history_domain import HistoryDomain
from quiz_api.domain.quiz_domain import QuizDomain
from quiz_api.repositories.history_repository import HistoryRepository
from quiz_api.schemas.history import (
    HistoryDetailResponse,
    HistorySummaryResponse,
    UserStatsResponse,
)

logger = logging.getLogger(__name__)


class HistoryService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = HistoryRepository(db)

    def list_summaries(
        self,
        user_id: int,
        scenario_id: Any = None,
        difficulty_id: Any = None,
        start_date: Any = None,
        end_date: Any = None,
    ) -> List[HistorySummaryResponse]:
        """List a user's attempts with their scores, newest first"""
        scenario_id = QuizDomain.parse_id(scenario_id, "scenario", required=False)
        difficulty_id = QuizDomain.parse_id(difficulty_id, "difficulty", required=False)
        start = HistoryDomain.parse_date(start_date, "start_date")
        end = HistoryDomain.parse_date(end_date, "end_date")
        if start and end and start > end:
            raise ValidationError("start_date must not be after end_date")

        rows = self.repository.get_summaries(
            user_id,
            scenario_id=scenario_id,
            difficulty_id=difficulty_id,
            start_date=start,
            end_date=end,
        )
        scenario_names = self.repository.get_scenario_names(row.scenario_id for row in rows)
        return [HistoryDomain.to_summary(row, scenario_names) for row in rows]

    def get_details(self, user_id: int, history_id: Any) -> HistoryDetailResponse:
        """Get one attempt of a user with every answered question"""
        history_id = QuizDomain.parse_id(history_id, "history_id")
        history = self.repository.get_by_id(history_id)
        if history is None or history.user_id != user_id:
            logger.info(f"🔍 Assessment {history_id} not found for user {user_id}")
            raise NotFoundError(f"Assessment with ID {history_id} not found.")
        return HistoryDomain.to_detail(history)

    def get_user_stats(self, user_id: int) -> UserStatsResponse:
        """Aggregate the scores of every attempt of a user"""
        return HistoryDomain.to_stats(user_id, self.repository.get_user_stats(user_id))
