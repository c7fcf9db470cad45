"""Credential acquisition through Google application-default credentials.

The interactive consent step happens outside dexsync (for example
``gcloud auth application-default login --scopes=...``); this flow only
refreshes those credentials into a bearer token.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC
from logging import getLogger
from typing import TYPE_CHECKING

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request

from dexsync.domain.errors import AuthorizationError, TransportError
from dexsync.domain.ports.session import Credential

if TYPE_CHECKING:
    from dexsync.config import GoogleAuthConfig

log = getLogger(__name__)


@dataclass(slots=True)
class ApplicationDefaultConsentFlow:
    config: GoogleAuthConfig

    async def __call__(self) -> Credential:
        return await asyncio.to_thread(self._obtain)

    def _obtain(self) -> Credential:
        try:
            credentials, project = google.auth.default(scopes=list(self.config.scopes))
            credentials.refresh(Request())
        except google.auth.exceptions.TransportError as exc:
            raise TransportError(f"consent: {exc}") from exc
        except google.auth.exceptions.GoogleAuthError as exc:
            raise AuthorizationError(f"consent: {exc}") from exc

        token = getattr(credentials, "token", None)
        if not token:
            raise AuthorizationError("consent: credentials did not yield an access token")

        expiry = getattr(credentials, "expiry", None)
        if expiry is not None and expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        log.info(f"Obtained Google access token (project={project or 'n/a'})")
        return Credential(token=token, expires_at=expiry)
