"""Users of the shared catalog."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Identity:
    """Verified external identity handed over by the sign-in provider."""

    email: str
    display_name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class User:
    id: str
    display_name: str
    email: str

    def renamed(self, display_name: str) -> User:
        return replace(self, display_name=display_name)
