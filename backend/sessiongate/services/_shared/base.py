# sessiongate/services/_shared/base.py
from __future__ import annotations

import logging

from sessiongate.core import errors as api_errors
from sessiongate.services._shared.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    TokenVerificationError,
)

# Checked in order; the first matching domain error wins.
_HTTP_EQUIVALENTS: tuple[tuple[type[ServiceError], type[api_errors.APIError]], ...] = (
    (NotFoundError, api_errors.NotFound),
    (ConflictError, api_errors.Conflict),
    (TokenVerificationError, api_errors.Unauthorized),
)


class BaseService:
    """
    Common base for application services.

    Services orchestrate ports and raise domain errors from
    :mod:`sessiongate.services._shared.errors`; they never build HTTP
    responses. :meth:`translate_exceptions` is the single place where a domain
    error becomes an :class:`~sessiongate.core.errors.APIError`.
    """

    def __init__(self) -> None:
        self.log = logging.getLogger(type(self).__module__)

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map a domain error to its API counterpart.

        Internal errors become a bare 500 (their detail was logged where they
        were raised); any other :class:`ServiceError` becomes a 400.
        Non-service exceptions are returned unchanged.

        :param exc: Exception raised within the service.
        :returns: Exception ready to be re-raised by the view.
        """
        if isinstance(exc, InternalError):
            return api_errors.InternalServerError()
        for domain_error, api_error in _HTTP_EQUIVALENTS:
            if isinstance(exc, domain_error):
                return api_error(str(exc))
        if isinstance(exc, ServiceError):
            return api_errors.BadRequest(str(exc))
        return exc
