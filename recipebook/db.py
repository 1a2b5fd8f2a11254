from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .settings import settings


class Base(DeclarativeBase):
    pass


session_factory = sessionmaker(autocommit=False, autoflush=False)


def make_engine(database_url: str | None = None) -> Engine:
    """Build an engine for ``database_url`` (defaults to ``DATABASE_URL``).

    SQLite URLs get ``check_same_thread=False`` and their parent directory
    created, so a fresh checkout can start against ``sqlite:///./data/x.db``.
    """
    url = make_url(database_url or settings.database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def get_engine() -> Engine:
    if session_factory.kw.get("bind") is None:
        session_factory.configure(bind=make_engine())
    return session_factory.kw["bind"]


def create_tables() -> None:
    """Create missing tables (local/dev databases without Alembic)."""
    from . import models  # noqa: F401  registers mappers on Base

    Base.metadata.create_all(bind=get_engine())


@contextmanager
def session_scope(engine: Engine | None = None) -> Iterator[Session]:
    """Session for scripts: commit on success, roll back on error."""
    session = Session(bind=engine or get_engine())
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db():
    get_engine()
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
