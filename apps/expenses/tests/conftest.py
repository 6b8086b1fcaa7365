"""Test fixtures for the Expenses API."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest

APP_ROOT = Path(__file__).resolve().parents[1]
REPO_ROOT = Path(__file__).resolve().parents[3]
for path in (APP_ROOT, REPO_ROOT):
    if str(path) not in sys.path:
        sys.path.append(str(path))

from expenses_api import AppConfig, create_app


@pytest.fixture()
def app(tmp_path: Path):
    """Return a Flask app backed by a temporary SQLite database."""

    db_path = tmp_path / "test.db"
    config = AppConfig(
        database_url=f"sqlite:///{db_path}",
        secret_key="testing",
    )
    application = create_app(config)
    application.config.update(TESTING=True)
    yield application
    application.config["DB_ENGINE"].dispose()


@pytest.fixture()
def client(app):
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def repo(app):
    """Return a repository bound to the test database."""

    from expenses_api.repositories import ExpensesRepository

    return ExpensesRepository(app.config["DB_ENGINE"])
