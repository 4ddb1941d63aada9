"""SQLAlchemy engine and session lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ems.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _is_in_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


class Database:
    def __init__(self) -> None:
        self.engine: Engine | None = None
        self.session_factory: sessionmaker[Session] | None = None
        self.initialized: bool = False

    def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        url = settings.DATABASE_URL
        if not url:
            logger.warning("DATABASE_URL missing, database not initialized")
            return

        kwargs: dict = {"echo": settings.DATABASE_ECHO}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if _is_in_memory_sqlite(url):
                # One shared connection, otherwise every session sees an empty database
                kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **kwargs)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

        # Import registers the mapped tables on Base.metadata
        from ems.models import entities  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        self.initialized = True
        logger.info("Database initialized (dialect=%s)", self.engine.dialect.name)

    def close(self) -> None:
        if self.engine:
            self.engine.dispose()
        self.engine = None
        self.session_factory = None
        self.initialized = False

    @contextmanager
    def session(self) -> Iterator[Session]:
        if not self.session_factory:
            raise RuntimeError("Database not initialized")

        session = self.session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        if not self.engine:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("Database connection check failed")
            return False


database = Database()
