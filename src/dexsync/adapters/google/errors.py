"""Translate httpx outcomes into the domain error types."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from http import HTTPStatus
from logging import getLogger

import httpx
from pydantic import ValidationError

from dexsync.domain.errors import AuthorizationError, TransportError

from .schema import ErrorResponse

log = getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate(response.json()).error.message
    except (ValueError, ValidationError):
        return response.reason_phrase or f"HTTP {response.status_code}"


def raise_for_status(response: httpx.Response, *, service: str) -> None:
    """Raise ``AuthorizationError`` for 401 and ``TransportError`` for any other failure."""

    if response.is_success:
        return
    message = _error_message(response)
    if response.status_code == HTTPStatus.UNAUTHORIZED:
        log.info(f"{service} rejected the credential: {message}")
        raise AuthorizationError(f"{service}: {message}")
    log.error(f"{service} request failed with {response.status_code}: {message}")
    raise TransportError(f"{service}: {message}", status_code=response.status_code)


@asynccontextmanager
async def transport_errors(service: str) -> AsyncIterator[None]:
    """Re-raise httpx network failures as ``TransportError``."""

    try:
        yield
    except httpx.HTTPError as exc:
        log.error(f"{service} request failed: {exc!r}")
        raise TransportError(f"{service}: {exc}") from exc
