from __future__ import annotations

import logging
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import (
    AlreadyProcessedError,
    DomainError,
    InvalidInputError,
    NotFoundError,
    PersistenceFailure,
)

logger = logging.getLogger(__name__)


def json_object() -> dict:
    """Request JSON body as a dict; anything else reads as empty."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error(e: DomainError):
    """Translate a service exception into a JSON error response."""
    if isinstance(e, NotFoundError):
        return fail(str(e), 404)
    if isinstance(e, (InvalidInputError, AlreadyProcessedError)):
        return fail(str(e), 400)
    if isinstance(e, PersistenceFailure):
        return fail(str(e), 500)
    logger.error("unmapped domain error: %s", e)
    return fail(str(e), 400)
