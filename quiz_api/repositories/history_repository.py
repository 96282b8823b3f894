from datetime import date, datetime
from typing import Dict, Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from quiz_api.models.history import History, HistoryQuestion
from quiz_api.models.question import Option, Question
from quiz_api.models.scenario import Scenario


class HistoryRepository:
    """Repository for reading completed attempts"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, history_id: int) -> Optional[History]:
        """Get a history record with its answered questions and their options"""
        return (
            self.db.query(History)
            .options(
                selectinload(History.lines)
                .selectinload(HistoryQuestion.question)
                .selectinload(Question.options),
                selectinload(History.lines)
                .selectinload(HistoryQuestion.question)
                .selectinload(Question.scenario),
            )
            .filter(History.id == history_id)
            .first()
        )

    def _score_query(self, user_id: int):
        return (
            self.db.query(
                History.id.label("history_id"),
                History.timestamp.label("timestamp"),
                History.feedback.label("feedback"),
                func.coalesce(func.sum(Option.points), 0).label("total_score"),
                func.count(HistoryQuestion.id).label("question_count"),
                func.min(Question.scenario_id).label("scenario_id"),
            )
            .outerjoin(HistoryQuestion, HistoryQuestion.history_id == History.id)
            .outerjoin(Option, Option.id == HistoryQuestion.option_id)
            .outerjoin(Question, Question.id == HistoryQuestion.question_id)
            .filter(History.user_id == user_id)
            .group_by(History.id, History.timestamp, History.feedback)
        )

    def get_summaries(
        self,
        user_id: int,
        scenario_id: Optional[int] = None,
        difficulty_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list:
        """
        Get one aggregated row per attempt of a user, newest first.

        Scenario and difficulty filters keep attempts that answered at least
        one question of that scenario or difficulty. Dates are inclusive.
        """
        query = self._score_query(user_id)

        if scenario_id is not None:
            query = query.filter(History.id.in_(self._histories_with(Question.scenario_id == scenario_id)))
        if difficulty_id is not None:
            query = query.filter(
                History.id.in_(self._histories_with(Question.question_difficulty_id == difficulty_id))
            )
        if start_date is not None:
            query = query.filter(History.timestamp >= datetime.combine(start_date, datetime.min.time()))
        if end_date is not None:
            query = query.filter(History.timestamp <= datetime.combine(end_date, datetime.max.time()))

        return query.order_by(History.timestamp.desc(), History.id.desc()).all()

    def _histories_with(self, criterion):
        return (
            select(HistoryQuestion.history_id)
            .join(Question, Question.id == HistoryQuestion.question_id)
            .where(criterion)
        )

    def get_scenario_names(self, scenario_ids: Iterable[int]) -> Dict[int, str]:
        unique_ids = {scenario_id for scenario_id in scenario_ids if scenario_id is not None}
        if not unique_ids:
            return {}
        rows = (
            self.db.query(Scenario.id, Scenario.scenario_name)
            .filter(Scenario.id.in_(unique_ids))
            .all()
        )
        return {scenario_id: name for scenario_id, name in rows}

    def get_user_stats(self, user_id: int):
        """Aggregate attempt count and scores over all attempts of a user"""
        totals = self._score_query(user_id).subquery()
        return self.db.query(
            func.count(totals.c.history_id).label("attempt_count"),
            func.coalesce(func.sum(totals.c.total_score), 0).label("total_score"),
            func.avg(totals.c.total_score).label("average_score"),
            func.max(totals.c.total_score).label("best_score"),
        ).one()

