"""Error types raised by the store client, session and reconciliation engine."""

from __future__ import annotations


class DexSyncError(RuntimeError):
    """Base class for all dexsync runtime failures."""


class TransportError(DexSyncError):
    """Raised when a remote call fails at the network level or with an unexpected status.

    Transport failures are never retried by the core; the caller decides.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthorizationError(DexSyncError):
    """Raised when the bearer credential is missing, invalid or expired (HTTP 401)."""


class SessionExpiredError(AuthorizationError):
    """Raised when a re-acquired credential is rejected as well."""


class ConsistencyWarning(UserWarning):
    """Soft signal that the remote store may hold racing or duplicated rows.

    The remote store stays the source of truth; a full reload shows whichever
    state won.
    """
