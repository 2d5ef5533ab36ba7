# sessiongate/infra/jwt/flask_jwt_token_codec.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, cast

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from sessiongate.services._shared.claims import AccessClaim, ClaimKind, TokenClaim
from sessiongate.services._shared.errors import SigningError
from sessiongate.services._shared.ports import TokenCodec

log = logging.getLogger(__name__)


@dataclass(slots=True)
class JWTTokenCodec(TokenCodec):
    """
    Adapter for Flask-JWT-Extended.

    The signing key is whatever the extension resolves from the app config
    (``JWT_SECRET_KEY``, falling back to ``SECRET_KEY``). The token ``sub``
    is the internal id as a decimal string; ``type`` carries the claim kind.

    .. note::
       Requires an active Flask app context.
    """

    def issue(self, claim: TokenClaim) -> str:
        # ``exp`` comes from the claim itself so its absolute expiry is kept
        # exactly; the extension's own expiry is switched off.
        create = create_access_token if isinstance(claim, AccessClaim) else create_refresh_token
        try:
            return cast(
                str,
                create(
                    identity=str(claim.subject),
                    additional_claims={"exp": claim.expires_at},
                    expires_delta=False,
                ),
            )
        except (RuntimeError, PyJWTError, ValueError, TypeError) as exc:
            log.error("token.sign_failed: %s", exc, exc_info=True)
            raise SigningError(f"Unable to sign {claim.token_type} token") from exc

    def verify(self, token: str, kind: ClaimKind) -> bool:
        return self._decode(token, kind) is not None

    def subject_of(self, token: str, kind: ClaimKind) -> int | None:
        claims = self._decode(token, kind)
        if claims is None:
            return None
        subject = claims.get("sub")
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        return None

    # -------------------- helpers --------------------

    def _decode(self, token: str, kind: ClaimKind) -> dict[str, Any] | None:
        """Return verified claims of the requested kind, or ``None``."""
        if not isinstance(token, str) or not token:
            return None
        try:
            claims = cast(dict[str, Any], decode_token(token))
        except (JWTExtendedException, PyJWTError, RuntimeError, ValueError) as exc:
            log.debug("token.rejected: %s", exc)
            return None
        if claims.get("type") != kind.token_type:
            log.debug("token.rejected: expected %s token", kind.token_type)
            return None
        return claims
