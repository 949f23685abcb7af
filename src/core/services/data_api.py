"""PostgREST data API client: request descriptors, filters and the HTTP calls."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from core.config import Config
from core.errors import ErrorCode, InternalError, TransportError, ValidationError
from core.models.booking import BookingSearch

logger = logging.getLogger(__name__)


class RequestSpec(BaseModel):
    method: str
    headers: dict[str, str]
    json_body: Any = None


def _encode(value: str) -> str:
    return quote(value, safe="")


def eq_filter(column: str, value: str) -> str:
    """Query-string filter selecting rows where `column` equals `value`."""
    return f"{column}=eq.{_encode(value)}"


def _tree_value(value: str) -> str:
    """Double-quoted operand for a logic tree, so `,` `(` `)` stay part of the value.

    PostgREST decodes the query string before parsing the tree, so the
    percent-encoding alone does not protect it.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return _encode(f'"{escaped}"')


def _like_literal(value: str) -> str:
    """Escape pattern characters; a `*` becomes an escaped `%` once PostgREST expands it."""
    for char in ("\\", "%", "_", "*"):
        value = value.replace(char, f"\\{char}")
    return value


def build_search_filter(criteria: BookingSearch) -> str:
    """Disjunctive PostgREST filter over whichever criteria are set."""
    terms: list[str] = []

    if criteria.cal_event_id:
        terms.append(f"cal_event_id.eq.{_tree_value(criteria.cal_event_id)}")
    if criteria.patient_name:
        terms.append(f"patient_name.ilike.{_tree_value(f'*{_like_literal(criteria.patient_name)}*')}")
    if criteria.patient_contact:
        terms.append(f"patient_contact.eq.{_tree_value(criteria.patient_contact)}")
    if criteria.start_time:
        terms.append(f"start_time.eq.{_tree_value(criteria.start_time)}")
    if criteria.end_time:
        terms.append(f"end_time.eq.{_tree_value(criteria.end_time)}")

    if not terms:
        raise ValidationError("Provide at least one search criterion")

    return f"or=({','.join(terms)})"


class DataApiClient:
    def __init__(self, config: Config, timeout: float | None = None) -> None:
        self._config = config
        self._timeout = timeout if timeout is not None else config.request_timeout_seconds
        self._client: httpx.Client | None = None

    @property
    def table_url(self) -> str:
        return self._config.bookings_url

    def build_request(self, method: str, body: Any = None) -> RequestSpec:
        key = self._config.service_role_key
        return RequestSpec(
            method=method,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {key}",
                "apikey": key,
            },
            json_body=body,
        )

    def _require_client(self) -> httpx.Client:
        if self._client is None:
            raise InternalError("DataApiClient is not open. Use it as a context manager.")
        return self._client

    def send(self, spec: RequestSpec, query: str | None = None, prefer: str | None = None) -> httpx.Response:
        """Issue one request; transport failures become TransportError."""
        client = self._require_client()
        url = f"{self.table_url}?{query}" if query else self.table_url
        headers = dict(spec.headers)
        if prefer:
            headers["Prefer"] = prefer

        try:
            return client.request(spec.method, url, headers=headers, json=spec.json_body)
        except httpx.TimeoutException as e:
            logger.error("Data API %s timed out: %s", spec.method, e)
            raise TransportError(f"Data API timed out: {e}", code=ErrorCode.TIMEOUT) from e
        except httpx.HTTPError as e:
            logger.error("Data API %s failed: %s", spec.method, e)
            raise TransportError(f"Data API request failed: {e}") from e

    def insert_row(self, row: dict[str, Any]) -> httpx.Response:
        return self.send(self.build_request("POST", row))

    def update_rows(self, column: str, value: str, changes: dict[str, Any]) -> httpx.Response:
        return self.send(
            self.build_request("PATCH", changes),
            query=eq_filter(column, value),
            prefer="return=representation",
        )

    def select_rows(self, filter_expression: str) -> httpx.Response:
        return self.send(self.build_request("GET"), query=filter_expression)

    def open(self) -> None:
        self._client = httpx.Client(timeout=self._timeout)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None

    def __enter__(self) -> "DataApiClient":
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
