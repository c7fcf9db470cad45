"""Google OAuth adapters: consent, revocation and user info."""

from __future__ import annotations

from .consent import ApplicationDefaultConsentFlow
from .errors import raise_for_status, transport_errors
from .revoke import GoogleCredentialRevoker
from .schema import ErrorResponse, StoredCredential, UserInfoPayload
from .userinfo import GoogleUserInfoClient

__all__ = [
    "ApplicationDefaultConsentFlow",
    "ErrorResponse",
    "GoogleCredentialRevoker",
    "GoogleUserInfoClient",
    "StoredCredential",
    "UserInfoPayload",
    "raise_for_status",
    "transport_errors",
]
