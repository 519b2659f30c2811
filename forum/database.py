import os
import logging
from contextlib import contextmanager
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from forum.exceptions import ConflictError, InternalError

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./forum.db")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=os.getenv("SQL_ECHO", "False") == "True",
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """One session per request, closed once the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class UnitOfWork:
    """
    All-or-nothing group of writes on one session.

    begin() opens the unit, commit() persists everything written since begin(),
    rollback() discards it. Used as a context manager the unit commits on a clean
    exit and rolls back on any error before re-raising it. Storage errors are
    translated into the forum error taxonomy after the rollback.

    Precondition reads run before begin() in the transaction the session
    autobegins for them; begin() ends that read transaction and opens a fresh
    one for the writes. Writes are only made inside a unit, so nothing is
    pending when the read transaction ends.

    Nesting is not supported: callers open at most one unit per session.
    """

    def __init__(self, db: Session):
        self.db = db
        self.active = False

    def begin(self):
        if self.db.in_transaction():
            self.db.commit()
        self.db.begin()
        self.active = True
        return self

    def commit(self):
        try:
            self.db.commit()
        finally:
            self.active = False

    def rollback(self):
        try:
            self.db.rollback()
        finally:
            self.active = False

    def __enter__(self):
        return self.begin()

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            try:
                self.commit()
            except SQLAlchemyError as e:
                self._abort(e)
            return False

        if isinstance(exc, SQLAlchemyError):
            self._abort(exc)

        self.rollback()
        return False

    def _abort(self, error: SQLAlchemyError):
        self.rollback()
        if isinstance(error, IntegrityError):
            logger.warning(f"Unit of work rolled back on constraint violation: {error.orig}")
            raise ConflictError("The change conflicts with existing data.") from error
        logger.error(f"Unit of work rolled back on storage error: {error}", exc_info=True)
        raise InternalError("Storage error, no changes were saved.") from error


@contextmanager
def unit_of_work(db: Session):
    """Scoped helper around UnitOfWork for the common `with unit_of_work(db):` case."""
    with UnitOfWork(db) as uow:
        yield uow
