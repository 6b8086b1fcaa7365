"""Database setup utilities for the Expenses API."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from alembic import command
from alembic.config import Config as AlembicConfig
from alembic.script import ScriptDirectory
from sqlalchemy import Column, DateTime, Integer, Numeric, UnicodeText, create_engine, inspect
from sqlalchemy.dialects import mssql
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session

APP_ROOT = Path(__file__).resolve().parents[1]

# SQL Server DATETIME rounds to ~3 ms and starts in 1753.
Timestamp = DateTime().with_variant(mssql.DATETIME2(), "mssql")


class Base(DeclarativeBase):
    """Declarative base holding the API's table metadata."""


class ExpenseRecord(Base):
    """ORM mapping for the ``expenses`` table."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    description = Column(UnicodeText, nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    date = Column(Timestamp, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<ExpenseRecord {self.id}>"


metadata = Base.metadata


def create_db_engine(database_url: str, *, pool_size: Optional[int] = None) -> Engine:
    """Return a SQLAlchemy engine for the provided URL."""

    options: Dict[str, Any] = {"pool_pre_ping": True}
    if pool_size:
        options["pool_size"] = pool_size
    return create_engine(database_url, **options)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Context manager that yields a SQLAlchemy :class:`Session`.

    The session commits when the block exits cleanly and rolls back before
    re-raising when it does not.
    """

    with Session(engine, expire_on_commit=False) as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def ensure_database_schema(engine: Engine) -> None:
    """Provision the ``expenses`` table for the configured backend.

    SQLite databases are created directly from :data:`metadata` so tests and
    local runs need no migration step. Every other backend, SQL Server
    included, is brought to the latest Alembic revision by
    :func:`_run_alembic_upgrade`.
    """

    if engine.url.get_backend_name() == "sqlite":
        metadata.create_all(bind=engine)
        return

    _run_alembic_upgrade(engine)


def _alembic_config(active_engine: Engine) -> AlembicConfig:
    """Return an Alembic config pointing at ``migrations/`` and ``active_engine``."""

    config = AlembicConfig(str(APP_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(APP_ROOT / "migrations"))
    url = active_engine.url.render_as_string(hide_password=False)
    # ConfigParser interpolation treats "%" as special.
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return config


def _predates_migrations(active_engine: Engine) -> bool:
    """Return ``True`` when tables exist without an ``alembic_version`` table."""

    tables = set(inspect(active_engine).get_table_names())
    return bool(tables) and "alembic_version" not in tables


def _run_alembic_upgrade(active_engine: Engine) -> None:
    """Bring the database bound to ``active_engine`` to the head revision.

    Schemas created with ``create_all`` before migrations were introduced
    are stamped at the first revision, which creates ``expenses``, so the
    upgrade only applies later revisions.
    """

    config = _alembic_config(active_engine)
    if _predates_migrations(active_engine):
        first_revision = ScriptDirectory.from_config(config).get_base()
        command.stamp(config, first_revision)
    command.upgrade(config, "head")


__all__ = [
    "Base",
    "ExpenseRecord",
    "create_db_engine",
    "ensure_database_schema",
    "metadata",
    "session_scope",
]
