"""
Pytest tests for the persistence boundary: constraint translation and UnitOfWork
"""

import sqlite3
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from quiz_api.core.database import UnitOfWork, translate_integrity_error
from quiz_api.core.errors import ConstraintKind, ConstraintViolation
from quiz_api.models import History, Scenario


class FakePgError(Exception):
    def __init__(self, message, pgcode, column=None, constraint=None):
        super().__init__(message)
        self.pgcode = pgcode
        self.diag = SimpleNamespace(column_name=column, constraint_name=constraint)


def integrity_error(orig):
    return IntegrityError("INSERT ...", {}, orig)


class TestTranslateIntegrityError:
    """Test mapping driver errors to ConstraintViolation"""

    @pytest.mark.parametrize(
        "message, kind, column",
        [
            ("NOT NULL constraint failed: history.user_id", ConstraintKind.NOT_NULL, "history.user_id"),
            ("FOREIGN KEY constraint failed", ConstraintKind.FOREIGN_KEY, None),
            ("UNIQUE constraint failed: scenarios.scenario_name", ConstraintKind.UNIQUE, "scenarios.scenario_name"),
            ("CHECK constraint failed: positive_time", ConstraintKind.CHECK, None),
            ("something odd happened", ConstraintKind.UNKNOWN, None),
        ],
    )
    def test_sqlite_messages(self, message, kind, column):
        violation = translate_integrity_error(integrity_error(sqlite3.IntegrityError(message)))

        assert isinstance(violation, ConstraintViolation)
        assert violation.kind == kind
        assert violation.column == column
        assert message in violation.detail

    def test_sqlite_check_constraint_name(self):
        violation = translate_integrity_error(
            integrity_error(sqlite3.IntegrityError("CHECK constraint failed: positive_time"))
        )

        assert violation.constraint == "positive_time"

    @pytest.mark.parametrize(
        "pgcode, kind",
        [
            ("23502", ConstraintKind.NOT_NULL),
            ("23503", ConstraintKind.FOREIGN_KEY),
            ("23505", ConstraintKind.UNIQUE),
            ("23514", ConstraintKind.CHECK),
            ("23P01", ConstraintKind.UNKNOWN),
        ],
    )
    def test_postgres_sqlstate(self, pgcode, kind):
        orig = FakePgError("violation", pgcode, column="option_id", constraint="fk_option")

        violation = translate_integrity_error(integrity_error(orig))

        assert violation.kind == kind
        assert violation.column == "option_id"
        assert violation.constraint == "fk_option"


class TestUnitOfWork:
    """Test commit and rollback behaviour of UnitOfWork.transaction"""

    @pytest.fixture(autouse=True)
    def setup(self, db, seeded):
        self.db = db
        self.data = seeded
        self.uow = UnitOfWork(db)

    def test_commits_on_success(self, app):
        with self.uow.transaction() as session:
            session.add(Scenario(scenario_name="Blackout"))

        other = app.state.session_factory()
        try:
            assert other.query(Scenario).filter_by(scenario_name="Blackout").count() == 1
        finally:
            other.close()

    def test_rolls_back_on_error(self):
        with pytest.raises(RuntimeError):
            with self.uow.transaction() as session:
                session.add(History(user_id=self.data["users"]["ada"]))
                session.flush()
                raise RuntimeError("boom")

        assert self.db.query(History).count() == 0

    def test_integrity_error_becomes_constraint_violation(self):
        with pytest.raises(ConstraintViolation) as exc_info:
            with self.uow.transaction() as session:
                session.add(Scenario(scenario_name="Zombie Outbreak"))
                session.flush()

        assert exc_info.value.kind == ConstraintKind.UNIQUE
        assert exc_info.value.status_code == 409
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    def test_foreign_keys_enforced(self):
        with pytest.raises(ConstraintViolation) as exc_info:
            with self.uow.transaction() as session:
                session.add(History(user_id=98765))

        assert exc_info.value.kind == ConstraintKind.FOREIGN_KEY
        assert exc_info.value.status_code == 404
        assert self.db.query(History).count() == 0
