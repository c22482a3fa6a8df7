"""Sign-in session models."""

from enum import StrEnum
from typing import NewType

from pydantic import BaseModel, Field

SessionToken = NewType("SessionToken", str)


class Session(BaseModel):
    """Idena sign-in session.

    `nonce` and `address` are bound together once by start_sign_in;
    `signature` is recorded once by a successful authenticate.
    """

    token: SessionToken
    created_at: float  # Clock reading at creation, drives expiry
    nonce: str | None = None
    address: str | None = None
    signature: str | None = None
    cached_expiration_date: str | None = None  # Validation time of the last epoch, fetched lazily


class SignInStatus(StrEnum):
    """Result of starting a sign-in.

    - STARTED: nonce issued and address bound
    - ALREADY_STARTED: session already has a nonce, nothing changed
    - NOT_FOUND: token unknown or expired
    """

    STARTED = "started"
    ALREADY_STARTED = "already_started"
    NOT_FOUND = "not_found"


class SignInOutcome(BaseModel):
    status: SignInStatus
    nonce: str | None = None


class AuthStatus(StrEnum):
    """Result of submitting a signature.

    - AUTHENTICATED: signature recovers to the bound address and was recorded
    - REJECTED: recovery failed or the address does not match
    - NOT_READY: sign-in not started yet, or a signature was already accepted
    - NOT_FOUND: token unknown or expired
    """

    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"
    NOT_READY = "not_ready"
    NOT_FOUND = "not_found"


class AuthOutcome(BaseModel):
    status: AuthStatus

    @property
    def ok(self) -> bool | None:
        """True/False for a decided attempt, None when nothing was checked."""
        if self.status == AuthStatus.AUTHENTICATED:
            return True
        if self.status == AuthStatus.REJECTED:
            return False
        return None


class SessionView(BaseModel):
    """Session initialization response."""

    token: SessionToken = Field(..., description="Opaque session token used by every subsequent call")
