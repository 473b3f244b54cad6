"""Translate domain errors into JSON responses at the HTTP boundary."""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"success": False, "error": str(e), "field": e.field}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"success": False, "error": str(e)}), 404

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return jsonify({"success": False, "error": str(e)}), 409

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify({"success": False, "error": e.description}), e.code

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unhandled exception: %s", e)
        return jsonify({"success": False, "error": "Internal server error"}), 500
