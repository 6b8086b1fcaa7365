"""JSON error responses for the Expenses API."""

from __future__ import annotations

from flask import Flask, Response, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException


def _http_error(exc: HTTPException) -> tuple[Response, int]:
    """Render any :class:`HTTPException` as ``{"error": ...}``."""

    status = exc.code or 500
    return jsonify({"error": exc.description}), status


def _database_error(exc: SQLAlchemyError) -> tuple[Response, int]:
    """Answer ``503`` when the database layer fails mid-request."""

    current_app.logger.exception("Database error while handling request: %s", exc)
    return jsonify({"error": "Database unavailable"}), 503


def register_error_handlers(app: Flask) -> None:
    """Attach the JSON error handlers to ``app``."""

    app.register_error_handler(HTTPException, _http_error)
    app.register_error_handler(SQLAlchemyError, _database_error)
