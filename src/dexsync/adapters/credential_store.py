"""File-backed persistence for the bearer credential."""

from __future__ import annotations

import os
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from dexsync.adapters.google.schema import StoredCredential
from dexsync.domain.ports.session import Credential

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


@dataclass(slots=True)
class FileCredentialStore:
    """Keeps the credential as JSON in a file readable only by its owner."""

    path: Path

    def load(self) -> Credential | None:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            stored = StoredCredential.model_validate_json(raw)
        except ValidationError:
            log.warning(f"Ignoring unreadable credential file {self.path}")
            return None
        return Credential(token=stored.access_token, expires_at=stored.expires_at)

    def save(self, credential: Credential) -> None:
        stored = StoredCredential(access_token=credential.token, expires_at=credential.expires_at)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(stored.model_dump_json())

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
