"""Hosted data store HTTP client.

Talks to a PostgREST-style REST endpoint (``{url}/rest/v1/{table}``):
equality filters are sent as ``column=eq.value`` query parameters and
writes ask for the stored rows back with ``Prefer: return=representation``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import orjson

from cookbook.core.config import get_settings
from cookbook.observability.logging import get_logger
from cookbook.services.store.exceptions import (
    DataStoreResponseError,
    DataStoreTimeoutError,
    DataStoreUnavailableError,
)


if TYPE_CHECKING:
    from cookbook.core.config import Settings
    from cookbook.services.store.protocol import Row


logger = get_logger(__name__)


def _filter_params(filters: dict[str, Any]) -> dict[str, str]:
    params: dict[str, str] = {}
    for column, value in filters.items():
        if isinstance(value, bool):
            value = str(value).lower()
        params[column] = f"eq.{value}"
    return params


class RestDataStoreClient:
    """HTTP client for the hosted recipe data store.

    Example:
        ```python
        store = RestDataStoreClient()
        await store.initialize()

        rows = await store.select("favorites", user_id="u-1")

        await store.shutdown()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._http_client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        """Get the REST root of the data store."""
        url = self._settings.store.url
        if not url:
            msg = "Data store URL not configured"
            raise RuntimeError(msg)
        return f"{url.rstrip('/')}/rest/v1"

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        api_key = self._settings.STORE_API_KEY
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"

        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self._settings.store.timeout),
            headers=headers,
        )
        logger.info("RestDataStoreClient initialized", base_url=self.base_url)

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("RestDataStoreClient shutdown")

    async def select(self, table: str, **filters: Any) -> list[Row]:
        params = {"select": "*", **_filter_params(filters)}
        response = await self._request("GET", table, params=params)
        return self._rows(response)

    async def insert(self, table: str, row: Row) -> Row:
        response = await self._request(
            "POST",
            table,
            content=orjson.dumps(row),
            headers={"Prefer": "return=representation"},
        )
        rows = self._rows(response)
        if not rows:
            msg = f"Insert into {table} returned no row"
            raise DataStoreResponseError(response.status_code, msg)
        return rows[0]

    async def update(self, table: str, values: Row, **filters: Any) -> list[Row]:
        response = await self._request(
            "PATCH",
            table,
            params=_filter_params(filters),
            content=orjson.dumps(values),
            headers={"Prefer": "return=representation"},
        )
        return self._rows(response)

    async def delete(self, table: str, **filters: Any) -> None:
        await self._request("DELETE", table, params=_filter_params(filters))

    async def _request(
        self,
        method: str,
        table: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request, mapping transport and HTTP errors.

        Raises:
            DataStoreUnavailableError: If the store is unreachable.
            DataStoreTimeoutError: If the request times out.
            DataStoreResponseError: For 4xx/5xx answers.
        """
        if not self._http_client:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        logger.debug("Data store request", method=method, table=table)

        try:
            response = await self._http_client.request(method, f"/{table}", **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Request to data store timed out", table=table)
            raise DataStoreTimeoutError(str(e)) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to data store", error=str(e))
            error_msg = f"Failed to connect to data store: {e}"
            raise DataStoreUnavailableError(error_msg) from e

        if response.is_error:
            self._raise_for_response(response, table)
        return response

    def _raise_for_response(self, response: httpx.Response, table: str) -> None:
        status_code = response.status_code
        try:
            error_body = orjson.loads(response.content)
            message = error_body.get("message", "Unknown error")
        except (orjson.JSONDecodeError, AttributeError):
            message = response.text or f"HTTP {status_code}"

        logger.warning(
            "Data store returned error",
            status_code=status_code,
            table=table,
            message=message,
        )
        raise DataStoreResponseError(status_code, message)

    @staticmethod
    def _rows(response: httpx.Response) -> list[Row]:
        if not response.content:
            return []
        data = orjson.loads(response.content)
        if isinstance(data, dict):
            return [data]
        return list(data)
