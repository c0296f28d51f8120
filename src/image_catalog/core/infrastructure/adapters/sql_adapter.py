"""Thin SQLAlchemy adapter wrapping engine and session operations."""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
import os
from typing import Any

from sqlalchemy import ColumnElement, Engine, create_engine, delete, event, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from image_catalog.core.infrastructure.sql.schema import Base, ImageRow
from image_catalog.core.utils.constants import (
    DEFAULT_POOL_TIMEOUT_SECONDS,
    ENV_IMAGE_CATALOG_DATABASE_URL,
    ENV_IMAGE_CATALOG_POOL_TIMEOUT,
)

_IN_MEMORY_SQLITE_URLS = frozenset({"sqlite://", "sqlite:///:memory:"})


def _unicode_lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite gets thread sharing, others a bounded pool wait.

    SQLite's built-in ``lower()`` only folds ASCII, so each SQLite connection
    gets a Unicode-aware replacement.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if database_url in _IN_MEMORY_SQLITE_URLS:
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **kwargs)

        @event.listens_for(engine, "connect")
        def register_unicode_lower(dbapi_connection: Any, connection_record: Any) -> None:
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

        return engine

    pool_timeout = float(
        os.getenv(ENV_IMAGE_CATALOG_POOL_TIMEOUT, DEFAULT_POOL_TIMEOUT_SECONDS)
    )
    return create_engine(database_url, pool_pre_ping=True, pool_timeout=pool_timeout)


class SQLAdapter:
    """Low-level image table operations (mechanical, no error handling).

    This adapter:
    - Owns the engine and session factory
    - Does NOT handle errors (lets SQLAlchemy exceptions bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, engine: Engine | None = None) -> None:
        """Initialize engine from environment and make sure the schema exists."""
        if engine is None:
            database_url = os.getenv(ENV_IMAGE_CATALOG_DATABASE_URL)
            if not database_url:
                raise RuntimeError(
                    f"{ENV_IMAGE_CATALOG_DATABASE_URL} environment variable is not set"
                )
            engine = build_engine(database_url)

        self.engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

        Base.metadata.create_all(engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self._sessions() as session:
            yield session

    def insert(self, *, values: dict[str, Any]) -> ImageRow:
        row = ImageRow(**values)
        with self.session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
        return row

    def get(self, *, image_id: int) -> ImageRow | None:
        with self.session() as session:
            return session.get(ImageRow, image_id)

    def update(self, *, image_id: int, values: dict[str, Any]) -> ImageRow | None:
        with self.session() as session:
            row = session.get(ImageRow, image_id)
            if row is None:
                return None

            for name, value in values.items():
                setattr(row, name, value)

            session.commit()
            session.refresh(row)
            return row

    def delete(self, *, image_id: int) -> int:
        with self.session() as session:
            result = session.execute(delete(ImageRow).where(ImageRow.id == image_id))
            session.commit()
            return int(result.rowcount or 0)

    def count(self, *, where: Sequence[ColumnElement[bool]] = ()) -> int:
        statement = select(func.count()).select_from(ImageRow).where(*where)
        with self.session() as session:
            return int(session.scalar(statement) or 0)

    def select_page(
        self,
        *,
        where: Sequence[ColumnElement[bool]] = (),
        offset: int,
        limit: int,
    ) -> list[ImageRow]:
        statement = (
            select(ImageRow)
            .where(*where)
            .order_by(ImageRow.created_at.desc(), ImageRow.id.desc())
            .offset(offset)
            .limit(limit)
        )
        with self.session() as session:
            return list(session.scalars(statement).all())
