"""HTTP client for the Google Sheets ``values`` API."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from dexsync.adapters.google.errors import raise_for_status, transport_errors
from dexsync.adapters.http_resilience import ResilientClient
from dexsync.domain.errors import AuthorizationError, TransportError

from .schema import AppendValuesResponse, ClearValuesResponse, UpdateValuesResponse, ValueRange

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    import httpx

    from dexsync.config import ResilienceConfig, SheetsConfig
    from dexsync.domain.model import Row
    from dexsync.domain.ports.store import CellRange, TableSchema

log = getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)

SERVICE: Final[str] = "sheets"
VALUE_INPUT_OPTION: Final[str] = "USER_ENTERED"

TokenSource = Callable[[], str | None]


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def a1_range(table: TableSchema, cell_range: CellRange) -> str:
    return f"{table.name}!{cell_range.to_a1()}"


@dataclass(slots=True)
class SheetsStoreClient:
    """``TabularStore`` backed by one spreadsheet.

    Every call is a single request: nothing here retries, and a 401 surfaces
    as ``AuthorizationError`` for the session layer to handle.
    """

    config: SheetsConfig
    token_source: TokenSource
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> SheetsStoreClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def read_range(self, table: TableSchema, cell_range: CellRange) -> list[Row]:
        target = a1_range(table, cell_range)
        response = await self._request("GET", self._values_path(target))
        payload = self._parse(response, ValueRange)
        log.debug(f"Read {len(payload.values)} rows from {target}")
        return payload.values

    async def append_row(self, table: TableSchema, row: Row) -> None:
        await self.append_rows(table, [row])

    async def append_rows(self, table: TableSchema, rows: Sequence[Row]) -> None:
        """Insert rows after the last non-empty row; existing cells are never overwritten."""

        target = a1_range(table, table.columns_range())
        response = await self._request(
            "POST",
            self._values_path(target, action="append"),
            params={"valueInputOption": VALUE_INPUT_OPTION, "insertDataOption": "INSERT_ROWS"},
            json={"majorDimension": "ROWS", "values": [list(row) for row in rows]},
        )
        result = self._parse(response, AppendValuesResponse)
        log.debug(f"Appended {len(rows)} rows to {result.updates.updated_range or target}")

    async def update_range(
        self,
        table: TableSchema,
        cell_range: CellRange,
        rows: Sequence[Row],
    ) -> None:
        target = a1_range(table, cell_range)
        response = await self._request(
            "PUT",
            self._values_path(target),
            params={"valueInputOption": VALUE_INPUT_OPTION},
            json={
                "range": target,
                "majorDimension": "ROWS",
                "values": [list(row) for row in rows],
            },
        )
        result = self._parse(response, UpdateValuesResponse)
        log.debug(f"Updated {result.updated_rows} rows in {result.updated_range or target}")

    async def clear_range(self, table: TableSchema, cell_range: CellRange) -> None:
        target = a1_range(table, cell_range)
        response = await self._request("POST", self._values_path(target, action="clear"), json={})
        result = self._parse(response, ClearValuesResponse)
        log.debug(f"Cleared {result.cleared_range or target}")

    def _values_path(self, target: str, *, action: str | None = None) -> str:
        path = (
            f"spreadsheets/{quote(self.config.spreadsheet_id, safe='')}"
            f"/values/{quote(target, safe='')}"
        )
        return f"{path}:{action}" if action else path

    def _headers(self) -> dict[str, str]:
        token = self.token_source()
        if not token:
            raise AuthorizationError(f"{SERVICE}: no credential held")
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        headers = self._headers()
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        async with transport_errors(SERVICE):
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=headers,
            )
        raise_for_status(response, service=SERVICE)
        return response

    @staticmethod
    def _parse(response: httpx.Response, model: type[TModel]) -> TModel:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TransportError(
                f"{SERVICE}: unexpected response payload",
                status_code=response.status_code,
            ) from exc