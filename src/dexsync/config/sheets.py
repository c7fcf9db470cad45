"""Google Sheets configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

SHEETS_BASE_URL = "https://sheets.googleapis.com/v4/"
SHEETS_TIMEOUT_SECONDS = 15.0
# Sheets allows 60 requests per minute per user per project.
SHEETS_RATE_LIMIT = RateLimit(max_calls=60, per_seconds=60.0)
JSON_HEADERS = {"Accept": "application/json"}


@dataclass(frozen=True, slots=True)
class SheetsConfig:
    """Holds the spreadsheet id and HTTP behaviour for the Sheets API."""

    spreadsheet_id: str
    resilience: ResilienceConfig


def default_sheets_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="sheets",
        base_url=SHEETS_BASE_URL,
        timeout_seconds=SHEETS_TIMEOUT_SECONDS,
        ratelimit=SHEETS_RATE_LIMIT,
        default_headers=JSON_HEADERS,
    )


def get_sheets_config(*, resilience: ResilienceConfig | None = None) -> SheetsConfig:
    values = require_env_vars(("DEXSYNC_SPREADSHEET_ID",))
    return SheetsConfig(
        spreadsheet_id=values["DEXSYNC_SPREADSHEET_ID"],
        resilience=resilience or default_sheets_resilience(),
    )
