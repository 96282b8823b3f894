from .history import History, HistoryQuestion
from .question import Option, Question
from .scenario import QuestionDifficulty, Scenario
from .user import User

__all__ = [
    "User",
    "Scenario",
    "QuestionDifficulty",
    "Question",
    "Option",
    "History",
    "HistoryQuestion",
]
