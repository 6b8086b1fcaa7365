"""HTTP routes for listing and creating expenses."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, jsonify, request, url_for
from flask.typing import ResponseReturnValue
from sqlalchemy.exc import NoResultFound

from .. import get_repository
from ..payloads import parse_expense_payload, serialize_expense

expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")


@expenses_bp.get("")
def list_expenses() -> Response:
    """Return every stored expense."""

    repo = get_repository()
    return jsonify([serialize_expense(expense) for expense in repo.list_expenses()])


@expenses_bp.post("")
def create_expense() -> ResponseReturnValue:
    """Persist the expense in the JSON body and return it.

    Responds ``201`` with a ``Location`` header pointing at
    :func:`get_expense` for the new record, or ``400`` when the body is not
    a JSON object with ``description``, ``amount`` and ``date``.
    """

    data = request.get_json(silent=True)
    payload, errors = parse_expense_payload(data)
    if errors or payload is None:
        return jsonify({"error": "Invalid expense payload", "details": errors}), 400

    repo = get_repository()
    saved = repo.create_expense(payload.to_expense())
    current_app.logger.info("Created expense %s", saved.id)
    location = url_for("expenses.get_expense", expense_id=saved.id)
    return jsonify(serialize_expense(saved)), 201, {"Location": location}


@expenses_bp.get("/<int:expense_id>")
def get_expense(expense_id: int) -> ResponseReturnValue:
    """Return a single expense."""

    repo = get_repository()
    try:
        expense = repo.get_expense(expense_id)
    except NoResultFound:
        return jsonify({"error": "Expense not found"}), 404
    return jsonify(serialize_expense(expense))
