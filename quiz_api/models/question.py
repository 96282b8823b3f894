from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from quiz_api.core.database import Base


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    question_text = Column(Text, nullable=False)
    scenario_id = Column(Integer, ForeignKey("scenarios.id"), nullable=False, index=True)
    question_difficulty_id = Column(
        Integer, ForeignKey("question_difficulties.id"), nullable=False, index=True
    )

    scenario = relationship("Scenario", back_populates="questions")
    difficulty = relationship("QuestionDifficulty", back_populates="questions")
    # No delete cascade: options must be removed before their question
    options = relationship("Option", back_populates="question", order_by="Option.id")


class Option(Base):
    __tablename__ = "options"

    id = Column(Integer, primary_key=True, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    option_text = Column(String(500), nullable=False)
    points = Column(Integer, nullable=False, default=0)

    question = relationship("Question", back_populates="options")

    # Option text is unique within its question
    __table_args__ = (
        UniqueConstraint("question_id", "option_text", name="uq_options_question_text"),
    )
