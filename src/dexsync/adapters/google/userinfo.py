"""Google user-info lookup for the signed-in account."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from dexsync.adapters.http_resilience import ResilientClient
from dexsync.domain.errors import AuthorizationError, TransportError
from dexsync.domain.model import Identity

from .errors import raise_for_status, transport_errors
from .schema import UserInfoPayload

if TYPE_CHECKING:
    from dexsync.config import GoogleAuthConfig, ResilienceConfig

log = getLogger(__name__)

SERVICE = "userinfo"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class GoogleUserInfoClient:
    """``IdentityProvider`` reading the OAuth user-info endpoint."""

    config: GoogleAuthConfig
    token_source: Callable[[], str | None]
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    async def __call__(self) -> Identity:
        token = self.token_source()
        if not token:
            raise AuthorizationError(f"{SERVICE}: no credential held")

        async with self.client_factory(self.config.resilience) as client, transport_errors(SERVICE):
            response = await client.get(
                self.config.userinfo_url,
                headers={"Authorization": f"Bearer {token}"},
            )
        raise_for_status(response, service=SERVICE)

        try:
            payload = UserInfoPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TransportError(f"{SERVICE}: unexpected response payload") from exc

        log.debug(f"Resolved signed-in account {payload.email}")
        return Identity(email=payload.email, display_name=payload.display_name)
