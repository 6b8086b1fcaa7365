"""Configuration helpers for the Expenses API.

Settings are read from environment variables so container deployments can
override them without code changes. The database URL is resolved in this
order:

* ``EXPENSES_DATABASE``: a complete SQLAlchemy URL.
* ``MSSQL_*``: a SQL Server connection assembled by
  :func:`build_mssql_database_uri_from_env` when ``MSSQL_PASSWORD`` is set.
* A SQLite file under ``instance/`` for local development.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from secrets import token_urlsafe
from typing import Iterable, Optional, Tuple
from urllib.parse import parse_qsl, quote_plus, urlencode

DEFAULT_DB_PATH = Path("instance") / "expenses.db"
DEFAULT_MSSQL_DRIVER = "ODBC Driver 18 for SQL Server"
DEFAULT_MSSQL_OPTIONS = "TrustServerCertificate=yes"

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppConfig:
    """Settings loaded from environment variables."""

    database_url: str
    secret_key: str
    log_level: str = "INFO"
    db_pool_size: Optional[int] = None


def _resolve_secret_key() -> str:
    """Return the configured secret key or a one-time generated value."""

    configured = os.getenv("EXPENSES_SECRET_KEY")
    if configured:
        return configured

    logger.warning(
        "EXPENSES_SECRET_KEY environment variable is not set; generated a one-time key."
    )
    return token_urlsafe(32)


def _parse_mssql_options(raw_options: str) -> Iterable[Tuple[str, str]]:
    """Return key/value pairs parsed from ``MSSQL_OPTIONS``.

    ``MSSQL_OPTIONS`` accepts a query-string-style value such as
    ``"TrustServerCertificate=yes&Encrypt=no"``.
    """

    return parse_qsl(raw_options, keep_blank_values=True)


def build_mssql_database_uri_from_env(
    *, dialect: str = "mssql+pyodbc"
) -> Optional[str]:
    """Assemble a SQL Server SQLAlchemy URI from ``MSSQL_*`` variables.

    The defaults target a local SQL Server container listening on
    ``localhost:1433`` with the ``sa`` login. ``MSSQL_DRIVER`` names the ODBC
    driver installed on the host and is passed to pyodbc as the ``driver``
    query parameter; ``MSSQL_OPTIONS`` is appended after it.

    Args:
        dialect: SQLAlchemy dialect and driver prefix for the URI.

    Returns:
        Optional[str]: Connection string, or ``None`` when ``MSSQL_PASSWORD``
        is unset so callers can fall back to SQLite.
    """

    password = os.getenv("MSSQL_PASSWORD")
    if not password:
        return None

    user = os.getenv("MSSQL_USER", "sa")
    host = os.getenv("MSSQL_HOST", "localhost")
    port = os.getenv("MSSQL_PORT", "1433")
    db_name = os.getenv("MSSQL_DB", "ExpenseTracker")
    driver = os.getenv("MSSQL_DRIVER", DEFAULT_MSSQL_DRIVER)
    options = os.getenv("MSSQL_OPTIONS", DEFAULT_MSSQL_OPTIONS)

    query_pairs = [("driver", driver)]
    if options:
        query_pairs.extend(_parse_mssql_options(options))

    return (
        f"{dialect}://{quote_plus(user)}:{quote_plus(password)}@{host}:{port}/"
        f"{quote_plus(db_name)}?{urlencode(query_pairs)}"
    )


def _resolve_database_url() -> str:
    configured = os.getenv("EXPENSES_DATABASE")
    if configured:
        return configured

    mssql = build_mssql_database_uri_from_env()
    if mssql:
        return mssql

    DEFAULT_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    return "sqlite:///" + str(DEFAULT_DB_PATH.resolve())


def _resolve_pool_size() -> Optional[int]:
    raw = os.getenv("EXPENSES_DB_POOL_SIZE")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer EXPENSES_DB_POOL_SIZE=%r.", raw)
        return None


def _resolve_log_level() -> str:
    raw = os.getenv("EXPENSES_LOG_LEVEL", "INFO").strip().upper()
    if isinstance(logging.getLevelName(raw), int):
        return raw
    logger.warning("Ignoring unknown EXPENSES_LOG_LEVEL=%r; using INFO.", raw)
    return "INFO"


def load_config() -> AppConfig:
    """Create an :class:`AppConfig` instance from environment variables."""

    return AppConfig(
        database_url=_resolve_database_url(),
        secret_key=_resolve_secret_key(),
        log_level=_resolve_log_level(),
        db_pool_size=_resolve_pool_size(),
    )
