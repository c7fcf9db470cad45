"""Pydantic models for Google API error bodies and OAuth payloads."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GoogleBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ErrorDetail(GoogleBaseModel):
    code: int
    message: str = ""
    status: str | None = None


class ErrorResponse(GoogleBaseModel):
    error: ErrorDetail


class UserInfoPayload(GoogleBaseModel):
    email: str
    name: str | None = None
    given_name: str | None = None
    verified_email: bool | None = None

    @field_validator("email")
    @classmethod
    def _require_email(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("user info carries a blank email")
        return stripped

    @property
    def display_name(self) -> str:
        return self.name or self.given_name or self.email


class StoredCredential(GoogleBaseModel):
    """On-disk form of the bearer credential."""

    access_token: str
    expires_at: datetime | None = Field(default=None)
