import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from quiz_api.core.config import Settings
from quiz_api.core.database import UnitOfWork
from quiz_api.core.errors import ConstraintViolation, ServiceError, ValidationError
from quiz_api.domain.quiz_domain import QuizDomain
from quiz_api.repositories.quiz_repository import QuizRepository
from quiz_api.repositories.scenario_repository import ScenarioRepository
from quiz_api.schemas.quiz import QuestionResponse, QuizAttemptInput, QuizAttemptResult
from quiz_api.services.feedback import FeedbackService

logger = logging.getLogger(__name__)


class QuizService:
    def __init__(
        self,
        db: Session,
        settings: Settings,
        feedback_service: Optional[FeedbackService] = None,
    ):
        self.db = db
        self.settings = settings
        self.unit_of_work = UnitOfWork(db)
        self.repository = QuizRepository(db)
        self.scenario_repository = ScenarioRepository(db)
        self.feedback_service = (
            feedback_service if feedback_service is not None else FeedbackService(settings)
        )

    def _resolve_limit(self, limit: Any) -> int:
        limit = QuizDomain.parse_id(limit, "limit", required=False)
        if limit is None:
            return self.settings.QUIZ_DEFAULT_LIMIT
        if limit <= 0:
            raise ValidationError("limit must be a positive number")
        return min(limit, self.settings.QUIZ_MAX_LIMIT)

    def get_questions(
        self,
        scenario_id: Any,
        question_difficulty_id: Any = None,
        limit: Any = None,
    ) -> List[QuestionResponse]:
        """
        Get a random set of questions for a scenario.

        The selection and its order change from call to call. An empty list
        is returned when nothing matches.
        """
        scenario_id = QuizDomain.parse_id(scenario_id, "scenario_id")
        question_difficulty_id = QuizDomain.parse_id(
            question_difficulty_id, "question_difficulty_id", required=False
        )
        limit = self._resolve_limit(limit)

        questions = self.repository.find_questions_by_criteria(
            scenario_id=scenario_id,
            question_difficulty_id=question_difficulty_id,
            limit=limit,
        )
        logger.info(
            f"🎯 Selected {len(questions)} question(s) for scenario {scenario_id}"
            f" (difficulty={question_difficulty_id}, limit={limit})"
        )
        return QuizDomain.to_response_list(questions)

    def _generate_feedback(self, attempt: QuizAttemptInput) -> Optional[str]:
        """
        Ask the feedback provider about an attempt before it is stored.

        The prompt data is read in its own short transaction and copied into
        plain schemas, so no connection is held while the LLM answers. An
        attempt with an unknown option gets no feedback; the write transaction
        rejects it anyway.
        """
        if not self.feedback_service.enabled:
            return None

        with self.unit_of_work.transaction():
            scenario = self.scenario_repository.get_by_id(attempt.scenario_id)
            scenario_name = scenario.scenario_name if scenario else None
            points_map = self.repository.get_points_for_options(
                s.option_id for s in attempt.selected_options
            )
            options = self.repository.get_options_for_questions(
                s.question_id for s in attempt.selected_options
            )
            options_by_question = {
                question_id: [QuizDomain.option_to_response(o) for o in question_options]
                for question_id, question_options in options.items()
            }

        if QuizDomain.find_unresolved_options(attempt.selected_options, points_map):
            return None

        return self.feedback_service.generate_feedback(
            scenario_name or f"Scenario ID {attempt.scenario_id}",
            attempt.selected_options,
            options_by_question,
            QuizDomain.calculate_total_score(attempt.selected_options, points_map),
        )

    def submit_attempt(self, user_id: int, attempt_input: Any) -> QuizAttemptResult:
        """
        Score an attempt and persist it as one history record.

        The body is validated before the database is touched, and optional
        feedback is generated before the write transaction opens. The points
        lookup, the history record and its lines are then handled in a single
        transaction: an unknown option id or any storage failure rolls back
        every write.
        """
        attempt = QuizDomain.parse_attempt(attempt_input)
        logger.info(
            f"📥 Submitting attempt for user {user_id}: scenario {attempt.scenario_id},"
            f" {len(attempt.selected_options)} answer(s)"
        )

        try:
            feedback = self._generate_feedback(attempt)

            with self.unit_of_work.transaction():
                points_map = self.repository.get_points_for_options(
                    s.option_id for s in attempt.selected_options
                )
                missing = QuizDomain.find_unresolved_options(attempt.selected_options, points_map)
                if missing:
                    logger.warning(f"⚠️ Option ID(s) {missing} not found for user {user_id}")
                    raise ValidationError("Invalid option_id found in selected_options.")

                total_score = QuizDomain.calculate_total_score(attempt.selected_options, points_map)

                scenario = self.scenario_repository.get_by_id(attempt.scenario_id)
                scenario_name = scenario.scenario_name if scenario else None

                history = self.repository.create_history(user_id, feedback)
                self.repository.create_history_questions(history.id, attempt.selected_options)

                result = QuizAttemptResult(
                    history_id=history.id,
                    user_id=user_id,
                    timestamp=history.timestamp,
                    total_score=total_score,
                    scenario_id=attempt.scenario_id,
                    scenario_name=scenario_name,
                    result_title=self.settings.RESULT_TITLE,
                    result_feedback=history.feedback or self.settings.RESULT_FEEDBACK,
                )
        except ServiceError:
            raise
        except ConstraintViolation as e:
            logger.warning(f"⚠️ Attempt rejected by a storage constraint: {e.detail}")
            raise ServiceError(
                "Invalid input data. Please check scenario, question, or option IDs.", 400
            ) from e
        except Exception as e:
            logger.exception(f"❌ Quiz attempt submission failed for user {user_id}")
            raise ServiceError("Failed to submit quiz attempt.", 500) from e

        logger.info(f"✅ Attempt {result.history_id} stored with score {result.total_score}")
        return result
