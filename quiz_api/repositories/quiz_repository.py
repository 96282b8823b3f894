from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from quiz_api.models.history import History, HistoryQuestion
from quiz_api.models.question import Option, Question
from quiz_api.schemas.quiz import SelectedOptionInput


class QuizRepository:
    """
    Repository for quiz taking: question selection and attempt persistence.

    Write methods only flush; committing or rolling back is left to the
    caller's UnitOfWork so that an attempt is persisted as one transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_questions_by_criteria(
        self,
        scenario_id: int,
        question_difficulty_id: Optional[int] = None,
        limit: int = 10,
    ) -> List[Question]:
        """Get a random selection of a scenario's questions with their options"""
        query = (
            self.db.query(Question)
            .options(
                selectinload(Question.options),
                joinedload(Question.scenario),
                joinedload(Question.difficulty),
            )
            .filter(Question.scenario_id == scenario_id)
        )
        if question_difficulty_id is not None:
            query = query.filter(Question.question_difficulty_id == question_difficulty_id)

        return query.order_by(func.random()).limit(limit).all()

    def get_points_for_options(self, option_ids: Iterable[int]) -> Dict[int, int]:
        """Map each existing option id to its point value"""
        unique_ids = set(option_ids)
        if not unique_ids:
            return {}
        rows = (
            self.db.query(Option.id, Option.points)
            .filter(Option.id.in_(unique_ids))
            .all()
        )
        return {option_id: points for option_id, points in rows}

    def get_options_for_questions(self, question_ids: Iterable[int]) -> Dict[int, List[Option]]:
        """Get every option of the given questions, grouped by question id"""
        unique_ids = set(question_ids)
        grouped: Dict[int, List[Option]] = {question_id: [] for question_id in unique_ids}
        if not unique_ids:
            return grouped
        options = (
            self.db.query(Option)
            .filter(Option.question_id.in_(unique_ids))
            .order_by(Option.id)
            .all()
        )
        for option in options:
            grouped[option.question_id].append(option)
        return grouped

    def create_history(self, user_id: int, feedback: Optional[str] = None) -> History:
        """Create a history record for a completed attempt"""
        db_history = History(
            user_id=user_id,
            feedback=feedback,
            timestamp=datetime.now(timezone.utc),
        )
        self.db.add(db_history)
        self.db.flush()
        return db_history

    def create_history_questions(
        self, history_id: int, selected_options: List[SelectedOptionInput]
    ) -> List[HistoryQuestion]:
        """Create one history line per answered question"""
        db_lines = [
            HistoryQuestion(
                history_id=history_id,
                question_id=selected.question_id,
                option_id=selected.option_id,
            )
            for selected in selected_options
        ]
        self.db.add_all(db_lines)
        self.db.flush()
        return db_lines
