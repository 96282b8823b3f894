from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from quiz_api.core.errors import ValidationError
from quiz_api.models.question import Option, Question
from quiz_api.schemas.quiz import (
    OptionResponse,
    QuestionResponse,
    QuizAttemptInput,
    SelectedOptionInput,
)


class QuizDomain:
    """Domain logic for quiz questions and attempts"""

    @staticmethod
    def parse_id(value: Any, field: str, required: bool = True) -> Optional[int]:
        """
        Parse an identifier coming from a request.

        Accepts ints and strings of digits; booleans and fractional numbers
        are rejected.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                raise ValidationError(f"{field} is required")
            return None
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be a number")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ValidationError(f"{field} must be a number")

    @staticmethod
    def parse_attempt(payload: Any) -> QuizAttemptInput:
        """Validate a submitted attempt body, reporting every problem at once"""
        try:
            return QuizAttemptInput.model_validate(payload)
        except PydanticValidationError as e:
            messages = []
            for err in e.errors():
                field = ".".join(str(part) for part in err["loc"])
                messages.append(f"{field}: {err['msg']}" if field else err["msg"])
            raise ValidationError("Invalid quiz attempt. " + "; ".join(messages))

    @staticmethod
    def option_to_response(option: Option) -> OptionResponse:
        return OptionResponse(
            option_id=option.id,
            option_text=option.option_text,
            points=option.points,
        )

    @staticmethod
    def to_response(question: Question) -> QuestionResponse:
        """Convert a Question model with its options to a QuestionResponse"""
        difficulty = question.difficulty
        scenario = question.scenario
        return QuestionResponse(
            question_id=question.id,
            question_text=question.question_text,
            question_difficulty_id=question.question_difficulty_id,
            question_difficulty_name=difficulty.question_difficulty_name if difficulty else None,
            difficulty_time=difficulty.time if difficulty else None,
            scenario_id=question.scenario_id,
            scenario_name=scenario.scenario_name if scenario else None,
            options=[QuizDomain.option_to_response(o) for o in question.options],
        )

    @staticmethod
    def to_response_list(questions: List[Question]) -> List[QuestionResponse]:
        return [QuizDomain.to_response(question) for question in questions]

    @staticmethod
    def find_unresolved_options(
        selected_options: List[SelectedOptionInput], points_map: Mapping[int, int]
    ) -> List[int]:
        return [s.option_id for s in selected_options if s.option_id not in points_map]

    @staticmethod
    def calculate_total_score(
        selected_options: List[SelectedOptionInput], points_map: Mapping[int, int]
    ) -> int:
        """
        Sum the points of every selected option.

        Each submitted pair counts on its own, so answering the same question
        twice scores twice.
        """
        return sum(points_map[s.option_id] for s in selected_options)

    @staticmethod
    def truncate_feedback(feedback: Optional[str], max_length: int) -> Optional[str]:
        if not feedback:
            return None
        feedback = feedback.strip()
        if len(feedback) <= max_length:
            return feedback or None
        return feedback[: max_length - 1].rstrip() + "…"

    @staticmethod
    def max_points_by_question(
        options_by_question: Dict[int, List[OptionResponse]]
    ) -> Dict[int, int]:
        return {
            question_id: max([o.points for o in options] + [0])
            for question_id, options in options_by_question.items()
        }
