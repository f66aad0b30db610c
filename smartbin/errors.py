"""
Error taxonomy and JSON error handlers.

Every failure a caller can see is answered as ``{"status": "error", ...}``
with HTTP 200; clients branch on the body, not the transport status.
Routing errors (404, 405, 429) keep their HTTP codes.
"""

import logging
from flask import jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class SmartBinError(Exception):
    """Base class for errors surfaced to API callers."""
    message = "Server Error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {
            'status': 'error',
            'error': self.message,
            'message': self.message,
        }


class DuplicateAccount(SmartBinError):
    message = "Duplicate Email"


class InvalidCredentials(SmartBinError):
    message = "Invalid email or password"


class InvalidToken(SmartBinError):
    message = "Invalid Token"


class Forbidden(SmartBinError):
    message = "Admin access required"


class AccountNotFound(SmartBinError):
    message = "Account not found"


class InsufficientFunds(SmartBinError):
    message = "Insufficient Funds"


class InsufficientPoints(SmartBinError):
    message = "Insufficient Points"


class InvalidRequest(SmartBinError):
    message = "Invalid request"


class ServerError(SmartBinError):
    message = "Server Error"


def error_response(error):
    return jsonify(error.to_dict()), 200


def register_error_handlers(app, db=None):
    """Setup JSON error handlers for the application"""

    @app.errorhandler(SmartBinError)
    def handle_smartbin_error(error):
        if db is not None:
            db.session.rollback()
        logger.info(f"{request.method} {request.path} rejected: {error.__class__.__name__}: {error.message}")
        return error_response(error)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        logger.info(f"{error.code} {error.name}: {request.path}")
        return jsonify({
            'status': 'error',
            'error': error.name,
            'message': error.description,
        }), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if db is not None:
            db.session.rollback()
        logger.exception(f"Unhandled error on {request.method} {request.path}: {error}")
        return error_response(ServerError())
