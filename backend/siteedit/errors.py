from typing import Any, Dict, List, Optional

from flask import jsonify
from werkzeug.exceptions import HTTPException

from siteedit.domain.invariants.exceptions import InvariantViolation


class EditError(Exception):
    """
    Base class for every failure surfaced by the edit pipeline.

    Subclasses fix the HTTP status and the machine-readable error code;
    `extra` carries structured details rendered next to the message.
    """

    status_code = 500
    code = "EditError"

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.code, "message": self.message}
        body.update(self.extra)
        return body


class Unauthorized(EditError):
    status_code = 401
    code = "Unauthorized"


class Forbidden(EditError):
    status_code = 403
    code = "Forbidden"


class NotFound(EditError):
    status_code = 404
    code = "NotFound"


class ValidationFailed(EditError):
    status_code = 400
    code = "ValidationFailed"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, details=details or [])
        self.details = details or []


class PermissionDenied(EditError):
    status_code = 403
    code = "PermissionDenied"

    def __init__(self, reasons: List[str], **extra: Any):
        super().__init__("Edit not permitted", reasons=list(reasons), **extra)
        self.reasons = list(reasons)


class ResolutionError(EditError):
    status_code = 422
    code = "ResolutionError"

    def __init__(self, message: str, operation_index: Optional[int] = None):
        super().__init__(message, operationIndex=operation_index)
        self.operation_index = operation_index

    def at(self, operation_index: int) -> "ResolutionError":
        """Return a copy of this error tagged with the failing operation."""
        return type(self)(self.message, operation_index=operation_index)


class PathNotFound(ResolutionError):
    code = "PathNotFound"


class StaleApply(EditError):
    status_code = 409
    code = "StaleApply"

    def __init__(self, expected_version: Optional[int], current_version: int):
        super().__init__(
            "Page has changed since this edit was proposed",
            expectedVersion=expected_version,
            currentVersion=current_version,
        )
        self.expected_version = expected_version
        self.current_version = current_version


class InvalidTransition(EditError):
    status_code = 409
    code = "InvalidTransition"


class InterpreterUnavailable(EditError):
    status_code = 503
    code = "InterpreterUnavailable"


class InterpreterFailed(EditError):
    status_code = 502
    code = "InterpreterFailed"


class PersistenceError(EditError):
    status_code = 500
    code = "PersistenceError"


def register_error_handlers(app):
    @app.errorhandler(EditError)
    def handle_edit_error(error):
        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code or 500
        return response
