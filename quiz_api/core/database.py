import logging
import re
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from quiz_api.core.config import Settings
from quiz_api.core.errors import ConstraintKind, ConstraintViolation

logger = logging.getLogger(__name__)

# Base is the parent class for all ORM models.
Base = declarative_base()

_PG_CONSTRAINT_CODES = {
    "23502": ConstraintKind.NOT_NULL,
    "23503": ConstraintKind.FOREIGN_KEY,
    "23505": ConstraintKind.UNIQUE,
    "23514": ConstraintKind.CHECK,
}

_SQLITE_CONSTRAINT_PATTERNS = [
    (re.compile(r"NOT NULL constraint failed: (?P<column>[\w.]+)"), ConstraintKind.NOT_NULL),
    (re.compile(r"FOREIGN KEY constraint failed"), ConstraintKind.FOREIGN_KEY),
    (re.compile(r"UNIQUE constraint failed: (?P<column>[\w., ]+)"), ConstraintKind.UNIQUE),
    (re.compile(r"CHECK constraint failed: ?(?P<constraint>\w*)"), ConstraintKind.CHECK),
]


def create_db_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine described by the settings"""
    url = settings.DATABASE_URL
    if not url.startswith("sqlite"):
        return create_engine(url, echo=settings.DATABASE_ECHO, pool_pre_ping=True)

    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # A single shared connection keeps the in-memory database alive
        options["poolclass"] = StaticPool
    engine = create_engine(url, echo=settings.DATABASE_ECHO, **options)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """SessionLocal is a factory for DB sessions; each request gets its own session."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Yield a database session and make sure it closes after use."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def translate_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    """Map a driver integrity error to a tagged ConstraintViolation"""
    orig = exc.orig
    detail = str(orig)

    sqlstate: Optional[str] = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate:
        diag = getattr(orig, "diag", None)
        return ConstraintViolation(
            _PG_CONSTRAINT_CODES.get(sqlstate, ConstraintKind.UNKNOWN),
            column=getattr(diag, "column_name", None),
            constraint=getattr(diag, "constraint_name", None),
            detail=detail,
        )

    for pattern, kind in _SQLITE_CONSTRAINT_PATTERNS:
        match = pattern.search(detail)
        if match:
            groups = match.groupdict()
            return ConstraintViolation(
                kind,
                column=groups.get("column"),
                constraint=groups.get("constraint") or None,
                detail=detail,
            )

    return ConstraintViolation(ConstraintKind.UNKNOWN, detail=detail)


class UnitOfWork:
    """
    Transaction boundary around a Session.

    Repositories always work against a plain Session; callers that need
    several statements to succeed or fail together wrap them in
    ``transaction()``.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        try:
            yield self.db
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise translate_integrity_error(e) from e
        except Exception:
            self.db.rollback()
            raise
