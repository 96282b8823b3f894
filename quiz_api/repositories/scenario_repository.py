from typing import List, Optional

from sqlalchemy.orm import Session

from quiz_api.models.scenario import QuestionDifficulty, Scenario


class ScenarioRepository:
    """Read access to scenarios"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, scenario_id: int) -> Optional[Scenario]:
        return self.db.query(Scenario).filter(Scenario.id == scenario_id).first()

    def get_all(self) -> List[Scenario]:
        return self.db.query(Scenario).order_by(Scenario.id.asc()).all()


class DifficultyRepository:
    """Read access to difficulty levels"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[QuestionDifficulty]:
        return self.db.query(QuestionDifficulty).order_by(QuestionDifficulty.id.asc()).all()
