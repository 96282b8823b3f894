"""
Pytest tests for reviewing completed attempts: HistoryService and /users/me endpoints
"""

from datetime import datetime, timedelta, timezone

import pytest

from quiz_api.core.errors import NotFoundError, ValidationError
from quiz_api.services.history import HistoryService
from quiz_api.services.quiz import QuizService


class TestHistoryService:
    """Test HistoryService summaries, details and stats"""

    @pytest.fixture(autouse=True)
    def setup(self, db, seeded, settings):
        self.data = seeded
        self.ada = seeded["users"]["ada"]
        self.alan = seeded["users"]["alan"]
        self.quiz = QuizService(db, settings)
        self.service = HistoryService(db)

    def submit(self, user_id, scenario, *pairs):
        return self.quiz.submit_attempt(
            user_id,
            {
                "scenario_id": self.data["scenarios"][scenario],
                "selected_options": [
                    {"question_id": self.data["questions"][q], "option_id": self.data["options"][o]}
                    for q, o in pairs
                ],
            },
        )

    def test_summaries_newest_first_with_scores(self):
        first = self.submit(self.ada, "zombies", ("q1", "B"), ("q2", "D"))
        second = self.submit(self.ada, "flood", ("q4", "G"))
        self.submit(self.alan, "zombies", ("q1", "A"))

        summaries = self.service.list_summaries(self.ada)

        assert [s.history_id for s in summaries] == [second.history_id, first.history_id]
        assert summaries[0].total_score == 7
        assert summaries[0].scenario_name == "Flash Flood"
        assert summaries[1].total_score == 15
        assert summaries[1].question_count == 2
        assert summaries[1].scenario_id == self.data["scenarios"]["zombies"]

    def test_summaries_filtered_by_scenario_and_difficulty(self):
        zombie_attempt = self.submit(self.ada, "zombies", ("q2", "D"))
        self.submit(self.ada, "flood", ("q4", "H"))

        by_scenario = self.service.list_summaries(self.ada, scenario_id=self.data["scenarios"]["zombies"])
        by_difficulty = self.service.list_summaries(
            self.ada, difficulty_id=str(self.data["difficulties"]["hard"])
        )

        assert [s.history_id for s in by_scenario] == [zombie_attempt.history_id]
        assert [s.history_id for s in by_difficulty] == [zombie_attempt.history_id]

    def test_summaries_filtered_by_dates(self):
        self.submit(self.ada, "zombies", ("q1", "B"))
        today = datetime.now(timezone.utc).date()

        assert len(self.service.list_summaries(self.ada, start_date=today.isoformat(), end_date=today)) == 1
        assert self.service.list_summaries(self.ada, start_date=today + timedelta(days=1)) == []
        assert self.service.list_summaries(self.ada, end_date=today - timedelta(days=1)) == []

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"start_date": "yesterday"},
            {"start_date": "2024-01-01xyz"},
            {"start_date": "2024-05-02", "end_date": "2024-05-01"},
            {"scenario_id": "zombies"},
        ],
    )
    def test_invalid_filters(self, kwargs):
        with pytest.raises(ValidationError):
            self.service.list_summaries(self.ada, **kwargs)

    def test_details(self):
        result = self.submit(self.ada, "zombies", ("q1", "B"), ("q2", "C"))

        details = self.service.get_details(self.ada, result.history_id)

        assert details.history_id == result.history_id
        assert details.scenario_name == "Zombie Outbreak"
        assert details.total_score == 10
        first, second = details.questions
        assert first.question_id == self.data["questions"]["q1"]
        assert first.selected_option_id == self.data["options"]["B"]
        assert first.points_awarded == 10
        assert [o.option_text for o in first.options] == ["A", "B"]
        assert second.points_awarded == 0

    def test_details_of_another_user_not_found(self):
        result = self.submit(self.alan, "zombies", ("q1", "B"))

        with pytest.raises(NotFoundError):
            self.service.get_details(self.ada, result.history_id)

    def test_details_unknown_id_not_found(self):
        with pytest.raises(NotFoundError):
            self.service.get_details(self.ada, 31337)

    def test_stats(self):
        self.submit(self.ada, "zombies", ("q1", "B"), ("q2", "D"))
        self.submit(self.ada, "zombies", ("q1", "A"), ("q3", "F"))

        stats = self.service.get_user_stats(self.ada)

        assert stats.attempt_count == 2
        assert stats.total_score == 18
        assert stats.average_score == 9.0
        assert stats.best_score == 15

    def test_stats_without_attempts(self):
        stats = self.service.get_user_stats(self.alan)

        assert stats.attempt_count == 0
        assert stats.total_score == 0
        assert stats.average_score == 0.0
        assert stats.best_score is None


class TestHistoryEndpoints:
    """Test the /users/me endpoints"""

    @pytest.fixture(autouse=True)
    def setup(self, client, seeded):
        self.client = client
        self.data = seeded
        self.headers = {"X-User-Id": str(seeded["users"]["ada"])}
        response = client.post(
            "/quiz/attempts",
            json={
                "scenario_id": seeded["scenarios"]["zombies"],
                "selected_options": [
                    {"question_id": seeded["questions"]["q1"], "option_id": seeded["options"]["B"]}
                ],
            },
            headers=self.headers,
        )
        self.history_id = response.json()["history_id"]

    def test_list_assessments(self):
        response = self.client.get("/users/me/assessments", headers=self.headers)

        assert response.status_code == 200
        assert [a["history_id"] for a in response.json()] == [self.history_id]

    def test_list_assessments_bad_filter(self):
        response = self.client.get(
            "/users/me/assessments", params={"difficulty": "hard"}, headers=self.headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_get_assessment(self):
        response = self.client.get(f"/users/me/assessments/{self.history_id}", headers=self.headers)

        assert response.status_code == 200
        assert response.json()["total_score"] == 10

    def test_get_assessment_of_someone_else(self):
        other = {"X-User-Id": str(self.data["users"]["alan"])}

        response = self.client.get(f"/users/me/assessments/{self.history_id}", headers=other)

        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_stats(self):
        response = self.client.get("/users/me/stats", headers=self.headers)

        assert response.status_code == 200
        assert response.json()["attempt_count"] == 1
        assert response.json()["best_score"] == 10

    def test_requires_identity(self):
        assert self.client.get("/users/me/stats").status_code == 401
