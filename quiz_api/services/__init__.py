from .catalog import CatalogService
from .feedback import FeedbackService
from .history import HistoryService
from .quiz import QuizService

__all__ = ["QuizService", "HistoryService", "CatalogService", "FeedbackService"]
