from pydantic import BaseModel, Field


class ScenarioResponse(BaseModel):
    scenario_id: int
    scenario_name: str


class DifficultyResponse(BaseModel):
    question_difficulty_id: int
    question_difficulty_name: str
    time: int = Field(..., description="Time limit in seconds")
