"""Database engine, session factory and transaction helper."""
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from eventhost.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Run a block as one unit of work: commit on success, roll back on any error.

    The session may already be inside an autobegun transaction (e.g. after the
    principal lookup), so this wraps whatever transaction is current instead of
    calling ``db.begin()``.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
