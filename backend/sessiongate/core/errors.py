"""Problem+JSON (RFC 7807) error responses for the session API.

Every error leaves the service as ``application/problem+json`` carrying a
stable ``code`` and the request's correlation id. 5xx bodies never include
the underlying cause; operators find it in the logs under the same id.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from sessiongate.core.logger import ensure_request_id

log = logging.getLogger(__name__)

_CODES: dict[int, str] = {
    HTTPStatus.BAD_REQUEST: "bad_request",
    HTTPStatus.UNAUTHORIZED: "unauthorized",
    HTTPStatus.NOT_FOUND: "not_found",
    HTTPStatus.METHOD_NOT_ALLOWED: "method_not_allowed",
    HTTPStatus.CONFLICT: "conflict",
    HTTPStatus.REQUEST_ENTITY_TOO_LARGE: "payload_too_large",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    HTTPStatus.INTERNAL_SERVER_ERROR: "internal_server_error",
    HTTPStatus.SERVICE_UNAVAILABLE: "service_unavailable",
}


def _code_for(status: int) -> str:
    return _CODES.get(status, "error")


def _as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build an RFC 7807 Problem Details dict.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Client-safe summary.
    :param details: Optional client-safe structured details.
    :returns: Problem+JSON dictionary.
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details
    return problem


def _respond(
    problem: dict[str, Any],
    *,
    headers: dict[str, str] | None = None,
    exc_info: bool = False,
) -> tuple[Response, int]:
    """Log ``problem`` (5xx as error, 4xx as warning) and render it."""
    status = int(problem["status"])
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "http.error code=%s status=%s detail=%s",
        problem["code"],
        status,
        problem["detail"],
        exc_info=exc_info,
    )
    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    for name, value in (headers or {}).items():
        resp.headers[name] = value
    return resp, status


class APIError(Exception):
    """
    Error raised by views (directly or via service translation).

    :param message: Client-safe description.
    :param status_code: HTTP status, ``400`` by default.
    :param code: Stable snake_case identifier.
    :param details: Optional structured payload.
    :param headers: Extra response headers (e.g. ``WWW-Authenticate``).
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code or _code_for(self.status_code)
        self.details = details or {}
        self.headers = headers or {}

    def to_problem(self) -> dict[str, Any]:
        return _as_problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details or None,
        )


class BadRequest(APIError):
    """400: malformed header or body, rejected before any store call."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST)


class Unauthorized(APIError):
    """401: the presented token is invalid, expired or of the wrong kind."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            message,
            status_code=HTTPStatus.UNAUTHORIZED,
            headers={"WWW-Authenticate": 'Bearer error="invalid_token"'},
        )


class NotFound(APIError):
    """404: unknown identity, or no active session to act on."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


class Conflict(APIError):
    """409: a session is already active for the identity."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT)


class InternalServerError(APIError):
    """500 with a fixed message; the cause was logged where it happened."""

    def __init__(self, message: str = "Unexpected error") -> None:
        super().__init__(message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


def init_app(app: Flask) -> None:
    """Register the problem+json handlers on ``app``."""

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _respond(err.to_problem(), headers=err.headers)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # Body validation failures are plain 400s in this API
        problem = _as_problem(
            status=HTTPStatus.BAD_REQUEST,
            code="validation_error",
            message="Validation failed",
            details={"errors": err.messages},
        )
        return _respond(problem)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or _code_for(status)).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        return _respond(_as_problem(status=status, code=_code_for(status), message=message))

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        problem = _as_problem(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
            message="Unexpected error",
        )
        return _respond(problem, exc_info=True)
