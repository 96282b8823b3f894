from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, Field


def reject_boolean_id(value):
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


# JSON true/false would otherwise be accepted as 1/0
SubmittedId = Annotated[int, BeforeValidator(reject_boolean_id)]


class OptionResponse(BaseModel):
    option_id: int
    option_text: str
    points: int


class QuestionResponse(BaseModel):
    question_id: int
    question_text: str
    question_difficulty_id: int
    question_difficulty_name: Optional[str] = None
    difficulty_time: Optional[int] = Field(
        None, description="Time limit in seconds for the question's difficulty"
    )
    scenario_id: int
    scenario_name: Optional[str] = None
    options: List[OptionResponse] = []


class SelectedOptionInput(BaseModel):
    question_id: SubmittedId = Field(..., description="ID of the answered question")
    option_id: SubmittedId = Field(..., description="ID of the option the user selected")
    # Display texts echoed by the client, only used to phrase feedback
    question_text: Optional[str] = None
    option_text: Optional[str] = None


class QuizAttemptInput(BaseModel):
    scenario_id: SubmittedId = Field(..., description="ID of the scenario the quiz was taken for")
    selected_options: List[SelectedOptionInput] = Field(
        ..., min_length=1, description="One entry per answered question"
    )


class QuizAttemptResult(BaseModel):
    history_id: int
    user_id: int
    timestamp: datetime
    total_score: int
    scenario_id: int
    scenario_name: Optional[str] = None
    result_title: str
    result_feedback: str
