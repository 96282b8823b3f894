from .history_repository import HistoryRepository
from .quiz_repository import QuizRepository
from .scenario_repository import DifficultyRepository, ScenarioRepository

__all__ = ["QuizRepository", "HistoryRepository", "ScenarioRepository", "DifficultyRepository"]
