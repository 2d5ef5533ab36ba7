# sessiongate/services/session/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignInIn:
    """
    Input DTO for sign-up-or-sign-in.

    :param external_id: Identity-provider user id.
    :type external_id: str
    :param display_name: Present only for a new identity (sign-up).
    :type display_name: str | None
    """

    external_id: str
    display_name: str | None = None

    @property
    def is_new_identity(self) -> bool:
        return self.display_name is not None


@dataclass(frozen=True, slots=True)
class RenewIn:
    """
    Input DTO for access-token renewal.

    :param refresh_token: Encoded refresh JWT from the bearer header.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class RevokeIn:
    """
    Input DTO for session revocation.

    :param refresh_token: Encoded refresh JWT from the bearer header.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class RenameIn:
    """
    Input DTO for changing the display name.

    :param access_token: Encoded access JWT from the bearer header.
    :type access_token: str
    :param name: New display name.
    :type name: str
    """

    access_token: str
    name: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class SignInOut:
    """
    Result of a successful sign-in.

    :param tokens: Freshly issued pair.
    :type tokens: TokenPairOut
    :param created: ``True`` when a new identity was created (sign-up).
    :type created: bool
    """

    tokens: TokenPairOut
    created: bool


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    """
    Output DTO for renewal.

    :param access_token: Encoded access JWT.
    :type access_token: str
    """

    access_token: str
