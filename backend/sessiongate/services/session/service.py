# sessiongate/services/session/service.py
from __future__ import annotations

from sessiongate.services._shared.base import BaseService
from sessiongate.services._shared.claims import AccessClaim, RefreshClaim
from sessiongate.services._shared.errors import (
    ConflictError,
    NotFoundError,
    SubjectExtractionError,
    TokenVerificationError,
)
from sessiongate.services._shared.ports.credential_store import CredentialStore
from sessiongate.services._shared.ports.token_codec import TokenCodec
from sessiongate.services.session.dto import (
    AccessTokenOut,
    RenameIn,
    RenewIn,
    RevokeIn,
    SignInIn,
    SignInOut,
    TokenPairOut,
)


class SessionService(BaseService):
    """
    Session lifecycle service (sign-up / sign-in / renew / revoke / rename).

    Each user holds at most one stored refresh token. A stored token means a
    session is ACTIVE; ``None`` means NONE. Sign-in moves NONE -> ACTIVE and
    is refused with a conflict while ACTIVE; revoke moves ACTIVE -> NONE;
    renew never touches the stored token.

    The service keeps no state of its own. Every decision is taken against
    the credential store, one statement at a time, so the existing-identity
    check-then-write is only best-effort consistent unless
    ``compare_and_swap`` is enabled.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        store: CredentialStore,
        compare_and_swap: bool = False,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param codec: Adapter for signing/verifying tokens.
        :param store: Credential store holding users and their session slot.
        :param compare_and_swap: Persist sign-in tokens only if no session is
            stored (first write wins) instead of overwriting (last write wins).
        """
        super().__init__()
        self.codec = codec
        self.store = store
        self.compare_and_swap = compare_and_swap

    # ------------------------------------------------------------------ #
    # Sign-up or sign-in
    # ------------------------------------------------------------------ #

    def sign_in(self, dto: SignInIn) -> SignInOut:
        """
        Start a session, creating the identity first when a name is given.

        Exactly one of the two flows runs per call, chosen by whether
        ``dto.display_name`` is present.

        :param dto: Sign-in input.
        :returns: Token pair and whether the identity was created.
        :raises NotFoundError: Unknown identity on the existing-identity flow.
        :raises ConflictError: A session is already active.
        :raises InternalError: Store or signing failure.
        """
        if dto.is_new_identity:
            return self._sign_up(dto)
        return self._sign_in_existing(dto)

    def _sign_up(self, dto: SignInIn) -> SignInOut:
        internal_id = self.store.create_user(dto.external_id, dto.display_name)
        pair = self._issue_pair(internal_id)
        self.store.set_refresh_token(internal_id, pair.refresh_token)
        self.log.info("session.signup", extra={"flow": "signup", "internal_id": internal_id})
        return SignInOut(tokens=pair, created=True)

    def _sign_in_existing(self, dto: SignInIn) -> SignInOut:
        # Raises NotFoundError for an unknown external id
        if self.store.fetch_refresh_token(dto.external_id) is not None:
            raise ConflictError("Session", "a session is already active for this identity")

        internal_id = self.store.find_internal_id_by_external_id(dto.external_id)
        if internal_id is None:
            # Deleted between the two reads
            raise NotFoundError("User", dto.external_id)

        pair = self._issue_pair(internal_id)
        if self.compare_and_swap:
            previous = self.store.set_refresh_token_if_absent(internal_id, pair.refresh_token)
            if previous is not None:
                raise ConflictError("Session", "a session was started concurrently")
        else:
            self.store.set_refresh_token(internal_id, pair.refresh_token)

        self.log.info("session.signin", extra={"flow": "signin", "internal_id": internal_id})
        return SignInOut(tokens=pair, created=False)

    # ------------------------------------------------------------------ #
    # Renew
    # ------------------------------------------------------------------ #

    def renew(self, dto: RenewIn) -> AccessTokenOut:
        """
        Issue a new access token against a valid refresh token.

        The refresh token is trusted on signature and expiry alone: the stored
        session slot is neither read nor rotated.

        :raises TokenVerificationError: Invalid, expired or non-refresh token.
        :raises SubjectExtractionError: Verified token without a usable subject.
        :raises NotFoundError: The subject no longer exists.
        """
        if not self.codec.verify(dto.refresh_token, RefreshClaim):
            raise TokenVerificationError("Refresh token is invalid or expired.")

        subject = self.codec.subject_of(dto.refresh_token, RefreshClaim)
        if subject is None:
            self.log.error("session.renew: verified token yielded no subject")
            raise SubjectExtractionError("No subject in refresh token.")

        internal_id = self.store.find_internal_id(subject)
        if internal_id is None:
            raise NotFoundError("User", subject)

        access = self.codec.issue(AccessClaim.for_subject(internal_id))
        return AccessTokenOut(access_token=access)

    # ------------------------------------------------------------------ #
    # Revoke
    # ------------------------------------------------------------------ #

    def revoke(self, dto: RevokeIn) -> None:
        """
        End the session owning ``dto.refresh_token``.

        There is no separate verification step: a token the codec cannot read
        a subject from is an internal error (500), not an authorization
        failure. Revoking a user with no stored token reports ``NotFoundError``
        and changes nothing.

        :raises SubjectExtractionError: The token is invalid in any way.
        :raises NotFoundError: No active session to revoke.
        """
        subject = self.codec.subject_of(dto.refresh_token, RefreshClaim)
        if subject is None:
            self.log.error("session.revoke: could not extract subject from refresh token")
            raise SubjectExtractionError("No subject in refresh token.")

        if self.store.clear_refresh_token(subject) == 0:
            raise NotFoundError("Session", subject)
        self.log.info("session.revoke", extra={"flow": "revoke", "internal_id": subject})

    # ------------------------------------------------------------------ #
    # Rename
    # ------------------------------------------------------------------ #

    def rename(self, dto: RenameIn) -> None:
        """
        Change the caller's display name.

        :raises TokenVerificationError: Invalid, expired or non-access token.
        :raises SubjectExtractionError: Verified token without a usable subject.
        :raises NotFoundError: The subject no longer exists.
        """
        if not self.codec.verify(dto.access_token, AccessClaim):
            raise TokenVerificationError("Access token is invalid or expired.")

        subject = self.codec.subject_of(dto.access_token, AccessClaim)
        if subject is None:
            self.log.error("session.rename: verified token yielded no subject")
            raise SubjectExtractionError("No subject in access token.")

        if self.store.rename_user(subject, dto.name) == 0:
            raise NotFoundError("User", subject)

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _issue_pair(self, internal_id: int) -> TokenPairOut:
        """Sign a fresh access/refresh pair for ``internal_id``."""
        access = self.codec.issue(AccessClaim.for_subject(internal_id))
        refresh = self.codec.issue(RefreshClaim.for_subject(internal_id))
        return TokenPairOut(access_token=access, refresh_token=refresh)
