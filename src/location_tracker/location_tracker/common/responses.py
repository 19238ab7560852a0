from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    ConditionFailed,
    DomainError,
    DuplicateKey,
    NotFound,
    StoreUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong!"


def status_for(exc: DomainError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, NotFound):
        return 404
    if isinstance(exc, (DuplicateKey, ConditionFailed)):
        return 409
    return 500


def error_response(exc: DomainError):
    """JSON ``{"error": ...}`` with the HTTP status for the error kind."""
    status = status_for(exc)
    if status >= 500:
        logger.error("%s: %s", type(exc).__name__, exc)
        message = "Service temporarily unavailable" if isinstance(exc, StoreUnavailable) else GENERIC_ERROR
        return jsonify({"error": message}), status
    return jsonify({"error": str(exc)}), status


def json_body() -> dict:
    """Request JSON as a dict; a missing or unparsable body reads as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return error_response(e)

    @app.errorhandler(Exception)
    def _unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.description}), e.code
        logger.exception("unhandled error")
        message = str(e) if app.config.get("DEBUG") else GENERIC_ERROR
        return jsonify({"error": message}), 500
