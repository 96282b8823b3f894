from typing import List

from sqlalchemy.orm import Session

from quiz_api.repositories.scenario_repository import DifficultyRepository, ScenarioRepository
from quiz_api.schemas.catalog import DifficultyResponse, ScenarioResponse


class CatalogService:
    """Read-only listings of scenarios and difficulty levels"""

    def __init__(self, db: Session):
        self.db = db
        self.scenario_repository = ScenarioRepository(db)
        self.difficulty_repository = DifficultyRepository(db)

    def get_scenarios(self) -> List[ScenarioResponse]:
        return [
            ScenarioResponse(scenario_id=s.id, scenario_name=s.scenario_name)
            for s in self.scenario_repository.get_all()
        ]

    def get_difficulties(self) -> List[DifficultyResponse]:
        return [
            DifficultyResponse(
                question_difficulty_id=d.id,
                question_difficulty_name=d.question_difficulty_name,
                time=d.time,
            )
            for d in self.difficulty_repository.get_all()
        ]
