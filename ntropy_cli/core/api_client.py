"""API Client for the Ntropy transaction enrichment API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ntropy_cli.core.config import DEFAULT_API_PREFIX, DEFAULT_BASE_URL
from ntropy_cli.core.store import API_KEY, ConfigStore

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-KEY"


class ErrorKind(str, Enum):
    """Why a request did not produce a usable response."""

    NOT_CONFIGURED = "not_configured"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    UNREACHABLE = "unreachable"


STATUS_KINDS = {
    401: ErrorKind.UNAUTHENTICATED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMITED,
}

STATUS_MESSAGES = {
    ErrorKind.UNAUTHENTICATED: "Authentication failed. Check your API key.",
    ErrorKind.FORBIDDEN: "Permission denied for this API key.",
    ErrorKind.NOT_FOUND: "Resource not found.",
    ErrorKind.RATE_LIMITED: "Rate limit exceeded. Wait before retrying.",
}

NOT_CONFIGURED_MESSAGE = "API key not configured. Run: ntropy config set --api-key KEY"


class NtropyAPIError(Exception):
    """Raised by ``APIResponse.unwrap`` for any failed request."""

    def __init__(self, kind: ErrorKind, message: str, status_code: int = 0):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass
class APIResponse:
    """Wrapper for API responses."""
    success: bool
    data: Any = None
    error: Optional[str] = None
    status_code: int = 0
    kind: Optional[ErrorKind] = None

    def unwrap(self) -> Any:
        """Return the decoded body, or raise ``NtropyAPIError``."""
        if self.success:
            return self.data
        raise NtropyAPIError(
            self.kind or ErrorKind.SERVER_ERROR,
            self.error or "Request failed",
            self.status_code,
        )


def decimal_to_number(value: Decimal) -> int | float:
    """Convert a Decimal to a JSON number without losing digits.

    Whole values become ints. Fractional values become floats only when the
    float reads back as the same Decimal; anything else raises ValueError.
    """
    if not value.is_finite():
        raise ValueError(f"{value} is not a finite number")
    if value == value.to_integral_value():
        return int(value)
    number = float(value)
    if Decimal(repr(number)) != value:
        raise ValueError(f"{value} has more digits than a JSON number keeps")
    return number


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return decimal_to_number(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _error_detail(response: httpx.Response) -> str:
    """Pull a human readable detail out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else json.dumps(value)
    return json.dumps(body)


class APIClient:
    """HTTP client for the Ntropy API.

    The API key is read from ``store`` on every call, so a key saved with
    ``config set`` is picked up without rebuilding the client. Nothing
    else is kept between requests.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        store: ConfigStore,
        base_url: str = DEFAULT_BASE_URL + DEFAULT_API_PREFIX,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, transport=self._transport)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        json_body: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> APIResponse:
        """Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path, relative to the versioned base URL
            json_body: JSON body for the request
            params: Query parameters; ``None`` values are left out
        """
        api_key = self.store.get(API_KEY)
        if not api_key:
            return APIResponse(
                success=False,
                error=NOT_CONFIGURED_MESSAGE,
                kind=ErrorKind.NOT_CONFIGURED,
            )

        url = f"{self.base_url}{endpoint}"
        headers = {
            API_KEY_HEADER: api_key,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        query = {k: v for k, v in (params or {}).items() if v is not None}
        content = None
        if json_body is not None:
            content = json.dumps(json_body, default=_json_default)

        logger.debug("%s %s params=%s", method, url, query)

        try:
            response = self.client.request(
                method, url, headers=headers, params=query or None, content=content
            )
        except httpx.TimeoutException:
            return APIResponse(
                success=False,
                error=f"Could not reach {self.base_url}: request timed out after {self.timeout:g}s",
                kind=ErrorKind.UNREACHABLE,
            )
        except httpx.TransportError as e:
            return APIResponse(
                success=False,
                error=f"Could not reach {self.base_url}: {e}",
                kind=ErrorKind.UNREACHABLE,
            )

        logger.debug("%s %s -> %d", method, url, response.status_code)

        if not response.is_success:
            kind = STATUS_KINDS.get(response.status_code, ErrorKind.SERVER_ERROR)
            if kind is ErrorKind.SERVER_ERROR:
                error = f"API Error ({response.status_code}): {_error_detail(response)}"
            else:
                error = STATUS_MESSAGES[kind]
            return APIResponse(
                success=False,
                error=error,
                status_code=response.status_code,
                kind=kind,
            )

        if not response.content:
            return APIResponse(success=True, data=None, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            data = {"raw": response.text}

        return APIResponse(success=True, data=data, status_code=response.status_code)

    # Transactions
    def enrich_transaction(self, transaction: dict, params: Optional[dict] = None) -> APIResponse:
        """Submit a single transaction for enrichment."""
        return self._request("POST", "/transactions", json_body=transaction, params=params)

    def enrich_batch(self, transactions: list[dict], params: Optional[dict] = None) -> APIResponse:
        """Submit several transactions at once; the response holds a batch id."""
        return self._request(
            "POST",
            "/transactions/batch",
            json_body={"transactions": transactions},
            params=params,
        )

    def get_batch(self, batch_id: str, params: Optional[dict] = None) -> APIResponse:
        """Look up a batch submitted earlier."""
        return self._request("GET", f"/transactions/batch/{quote(str(batch_id), safe='')}", params=params)

    def get_transaction(self, transaction_id: str, params: Optional[dict] = None) -> APIResponse:
        return self._request("GET", f"/transactions/{quote(str(transaction_id), safe='')}", params=params)

    def list_transactions(
        self,
        limit: int = 20,
        cursor: Optional[str] = None,
        params: Optional[dict] = None,
    ) -> APIResponse:
        return self._request(
            "GET",
            "/transactions",
            params={**(params or {}), "limit": limit, "cursor": cursor},
        )

    # Account holders
    def create_account_holder(self, account_holder: dict, params: Optional[dict] = None) -> APIResponse:
        return self._request("POST", "/account-holders", json_body=account_holder, params=params)

    def get_account_holder(self, account_holder_id: str, params: Optional[dict] = None) -> APIResponse:
        return self._request(
            "GET", f"/account-holders/{quote(str(account_holder_id), safe='')}", params=params
        )

    def list_account_holders(
        self,
        limit: int = 20,
        cursor: Optional[str] = None,
        params: Optional[dict] = None,
    ) -> APIResponse:
        return self._request(
            "GET",
            "/account-holders",
            params={**(params or {}), "limit": limit, "cursor": cursor},
        )

    def delete_account_holder(self, account_holder_id: str, params: Optional[dict] = None) -> APIResponse:
        """Delete an account holder. A successful delete carries no data."""
        return self._request(
            "DELETE", f"/account-holders/{quote(str(account_holder_id), safe='')}", params=params
        )

    # Reports
    def get_report(
        self,
        account_holder_id: str,
        period: Optional[str] = None,
        params: Optional[dict] = None,
    ) -> APIResponse:
        return self._request(
            "GET",
            f"/account-holders/{quote(str(account_holder_id), safe='')}/reports",
            params={**(params or {}), "period": period},
        )

    def get_metrics(self, account_holder_id: str, params: Optional[dict] = None) -> APIResponse:
        return self._request(
            "GET",
            f"/account-holders/{quote(str(account_holder_id), safe='')}/metrics",
            params=params,
        )

    # Labels
    def list_labels(self, params: Optional[dict] = None) -> APIResponse:
        return self._request("GET", "/labels", params=params)


def extract_items(data: Any, resource: str) -> list:
    """Return the list of records from any of the envelope shapes the API uses.

    Accepts a bare list, ``{"data": [...]}``, ``{"<resource>": [...]}``
    and ``{"items": [...]}``. Anything else yields an empty list.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("data", resource, resource.replace("-", "_"), "items"):
            value = data.get(key)
            if isinstance(value, list):
                return value
    return []


def next_cursor(data: Any) -> Optional[str]:
    """Cursor for the next page, if the response advertises one."""
    if isinstance(data, dict):
        return data.get("next_cursor") or data.get("cursor") or None
    return None
