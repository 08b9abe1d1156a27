"""
Client for the hosted store's REST interface.

Tables live under ``/rest/v1/<table>`` and remote procedures under
``/rest/v1/rpc/<name>``. Filters are sent as ``column=eq.<value>`` query
parameters. Change events are not polled: the hosted store posts them to the
``/webhooks/changes`` endpoint, which publishes into this store's feed.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from roomadmin.store.base import Store, StoreError
from roomadmin.store.feed import ChangeFeed

logger = logging.getLogger(__name__)


def _filter_value(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


class RestStore(Store):
    def __init__(
        self,
        url: Optional[str],
        key: Optional[str],
        timeout: float = 10.0,
        feed: Optional[ChangeFeed] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = (url or "").rstrip("/")
        self.key = key or ""
        self.feed = feed or ChangeFeed()
        self.client = httpx.Client(
            base_url=self.url,
            timeout=timeout,
            headers=self._headers(),
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    def _endpoint(self, table: str) -> str:
        return f"/rest/v1/{table}"

    def _params(self, filters: Optional[Dict[str, Any]]) -> Dict[str, str]:
        return {column: _filter_value(value) for column, value in (filters or {}).items()}

    def _request(self, method: str, path: str, **kwargs):
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise self._status_error(exc.response) from exc
        except httpx.HTTPError as exc:
            raise StoreError(f"Store request failed: {exc}") from exc

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise StoreError(f"Store returned a non-JSON body for {path}") from exc

    def _status_error(self, response: httpx.Response) -> StoreError:
        message = f"Store returned HTTP {response.status_code}"
        code = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or message
            code = body.get("code")
        return StoreError(message, code=code)

    def select(self, table, filters=None, order_by=None, descending=False, limit=None):
        params = {"select": "*", **self._params(filters)}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)
        rows = self._request("GET", self._endpoint(table), params=params)
        if not isinstance(rows, list):
            raise StoreError(f"Unexpected payload from {table}: {type(rows).__name__}")
        return rows

    def insert(self, table, row):
        return self._request("POST", self._endpoint(table), json=[row]) or []

    def update(self, table, values, filters):
        return (
            self._request("PATCH", self._endpoint(table), params=self._params(filters), json=values)
            or []
        )

    def delete(self, table, filters):
        self._request("DELETE", self._endpoint(table), params=self._params(filters))

    def rpc(self, name, params):
        return self._request("POST", f"/rest/v1/rpc/{name}", json=params)

    def close(self):
        self.client.close()
