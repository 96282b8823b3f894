from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from quiz_api.core.database import Base


class Scenario(Base):
    __tablename__ = "scenarios"

    id = Column(Integer, primary_key=True, index=True)
    scenario_name = Column(String(255), nullable=False, unique=True)

    questions = relationship("Question", back_populates="scenario")


class QuestionDifficulty(Base):
    __tablename__ = "question_difficulties"

    id = Column(Integer, primary_key=True, index=True)
    question_difficulty_name = Column(String(100), nullable=False, unique=True)
    # Time limit in seconds, enforced by the client-side timer
    time = Column(Integer, nullable=False)

    questions = relationship("Question", back_populates="difficulty")
