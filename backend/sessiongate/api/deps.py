"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request

from sessiongate.core.errors import BadRequest
from sessiongate.services._shared.errors import ServiceError
from sessiongate.services.session.service import SessionService

F = TypeVar("F", bound=Callable[..., Any])

SERVICE_EXTENSION_KEY = "session_service"


def get_session_service() -> SessionService:
    """Return the service built once by the application factory."""

    return cast(SessionService, current_app.extensions[SERVICE_EXTENSION_KEY])


def bearer_token() -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    :raises BadRequest: If the header is missing or not a single bearer token.
    """

    header = request.headers.get("Authorization")
    if not header:
        raise BadRequest("Missing Authorization header")
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise BadRequest("Authorization header must be 'Bearer <token>'")
    return parts[1]


@contextmanager
def translated(service: SessionService) -> Iterator[None]:
    """Re-raise service errors as their API (HTTP) counterparts."""

    try:
        yield
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def empty_response(status: int = 204) -> Response:
    """Return a body-less response (``204 No Content`` by default)."""

    return Response(status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
