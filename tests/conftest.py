import pytest
from fastapi.testclient import TestClient

from quiz_api.core.config import Settings
from quiz_api.main import create_app
from quiz_api.models import Option, Question, QuestionDifficulty, Scenario, User


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "AUTO_CREATE_TABLES": True,
        "FEEDBACK_ENABLED": False,
        "AOAI_ENDPOINT": "",
        "AOAI_API_KEY": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db):
    """
    Two users, two difficulties and two scenarios.

    Scenario "Zombie Outbreak": Q1 (A 0 / B 10), Q2 (C 0 / D 5), Q3 (E 0 / F 3).
    Scenario "Flash Flood": Q4 (G 7 / H 0).
    """
    ada = User(name="Ada", surname="Lovelace", email="ada@example.com")
    alan = User(name="Alan", surname="Turing", email="alan@example.com")
    easy = QuestionDifficulty(question_difficulty_name="Easy", time=30)
    hard = QuestionDifficulty(question_difficulty_name="Hard", time=15)
    zombies = Scenario(scenario_name="Zombie Outbreak")
    flood = Scenario(scenario_name="Flash Flood")
    db.add_all([ada, alan, easy, hard, zombies, flood])
    db.flush()

    def add_question(text, scenario, difficulty, options):
        question = Question(
            question_text=text,
            scenario_id=scenario.id,
            question_difficulty_id=difficulty.id,
        )
        db.add(question)
        db.flush()
        created = []
        for option_text, points in options:
            option = Option(question_id=question.id, option_text=option_text, points=points)
            db.add(option)
            created.append(option)
        db.flush()
        return question, created

    q1, (a, b) = add_question(
        "The horde is at the door. What do you grab?", zombies, easy, [("A", 0), ("B", 10)]
    )
    q2, (c, d) = add_question(
        "Your radio crackles. What do you do?", zombies, hard, [("C", 0), ("D", 5)]
    )
    q3, (e, f) = add_question(
        "Night falls. Where do you sleep?", zombies, easy, [("E", 0), ("F", 3)]
    )
    q4, (g, h) = add_question(
        "Water is rising fast. Where do you go?", flood, easy, [("G", 7), ("H", 0)]
    )
    db.commit()

    return {
        "users": {"ada": ada.id, "alan": alan.id},
        "difficulties": {"easy": easy.id, "hard": hard.id},
        "scenarios": {"zombies": zombies.id, "flood": flood.id},
        "questions": {"q1": q1.id, "q2": q2.id, "q3": q3.id, "q4": q4.id},
        "options": {
            "A": a.id, "B": b.id, "C": c.id, "D": d.id,
            "E": e.id, "F": f.id, "G": g.id, "H": h.id,
        },
    }


@pytest.fixture
def settings_factory():
    return make_settings
