"""Expenses API Flask application factory."""

from __future__ import annotations

from typing import Any

import click
from flask import Flask, current_app, g

from packages.expense_common import total_amount

from .config import AppConfig, load_config
from .database import create_db_engine, ensure_database_schema
from .errors import register_error_handlers
from .repositories import ExpensesRepository


def create_app(config: AppConfig | None = None) -> Flask:
    """Build and configure the Expenses API application instance.

    Args:
        config: Optional :class:`AppConfig` override. When ``None`` the
            settings are resolved from the environment by :func:`load_config`.

    Returns:
        Flask: Application with the ``/api/expenses`` routes registered and
        a SQLAlchemy engine stored on ``app.config['DB_ENGINE']``. The schema
        is provisioned on startup by :func:`ensure_database_schema`.
    """

    app = Flask(__name__)
    app_config = config or load_config()
    app.config.update(SECRET_KEY=app_config.secret_key)
    app.logger.setLevel(app_config.log_level)

    engine = create_db_engine(app_config.database_url, pool_size=app_config.db_pool_size)
    ensure_database_schema(engine)
    app.config["DB_ENGINE"] = engine
    app.logger.info("Using %s database backend.", engine.url.get_backend_name())

    from .blueprints.expenses import expenses_bp

    app.register_blueprint(expenses_bp)
    register_error_handlers(app)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.teardown_appcontext
    def teardown(_: Any) -> None:
        g.pop("expenses_repo", None)

    @app.cli.command("init-db")
    def init_db_command() -> None:
        """Create or migrate the database schema."""

        ensure_database_schema(engine)
        click.echo("Database initialized.")

    @app.cli.command("list-expenses")
    def list_expenses_command() -> None:
        """Print every stored expense followed by the total amount."""

        expenses = ExpensesRepository(engine).list_expenses()
        for expense in expenses:
            click.echo(
                f"{expense.id}\t{expense.date:%Y-%m-%d %H:%M}\t"
                f"{expense.amount:.2f}\t{expense.description}"
            )
        click.echo(f"Total: {total_amount(expenses):.2f} ({len(expenses)} expenses)")

    return app


def get_repository() -> ExpensesRepository:
    """Return a repository cached on :mod:`flask.g` for the active request."""

    if not hasattr(g, "expenses_repo"):
        engine = current_app.config["DB_ENGINE"]
        g.expenses_repo = ExpensesRepository(engine)
    return g.expenses_repo


__all__ = ["create_app", "AppConfig", "get_repository"]
