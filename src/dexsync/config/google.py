"""Google OAuth configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var
from .http_resilience import ResilienceConfig

DEFAULT_GOOGLE_SCOPES = (
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
)

GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
GOOGLE_REVOKE_URL = "https://oauth2.googleapis.com/revoke"
GOOGLE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class GoogleAuthConfig:
    scopes: tuple[str, ...] = DEFAULT_GOOGLE_SCOPES
    userinfo_url: str = GOOGLE_USERINFO_URL
    revoke_url: str = GOOGLE_REVOKE_URL
    resilience: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(
            name="google-oauth",
            timeout_seconds=GOOGLE_TIMEOUT_SECONDS,
            default_headers={"Accept": "application/json"},
        )
    )


def get_google_auth_config() -> GoogleAuthConfig:
    raw_scopes = optional_env_var("DEXSYNC_OAUTH_SCOPES")
    if raw_scopes is None:
        return GoogleAuthConfig()
    scopes = tuple(scope for scope in raw_scopes.replace(",", " ").split() if scope)
    return GoogleAuthConfig(scopes=scopes or DEFAULT_GOOGLE_SCOPES)
