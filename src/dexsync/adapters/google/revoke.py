"""Remote revocation of Google OAuth tokens."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dexsync.adapters.http_resilience import ResilientClient

from .errors import raise_for_status, transport_errors

if TYPE_CHECKING:
    from dexsync.config import GoogleAuthConfig, ResilienceConfig
    from dexsync.domain.ports.session import Credential

SERVICE = "revoke"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class GoogleCredentialRevoker:
    config: GoogleAuthConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    async def __call__(self, credential: Credential) -> None:
        async with self.client_factory(self.config.resilience) as client, transport_errors(SERVICE):
            response = await client.post(
                self.config.revoke_url,
                data={"token": credential.token},
            )
        raise_for_status(response, service=SERVICE)
