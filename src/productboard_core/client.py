"""Authenticated HTTP client for the Productboard REST API.

One request per call: attach the per-request token to a client rooted at the
configured base URL, decode the JSON body, and turn non-2xx responses into
ProductboardApiError. Retrying is left to the caller.
"""
import logging
import math
from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx

from .config import Settings, get_api_token, get_settings
from .errors import ProductboardApiError, TransportError

logger = logging.getLogger("productboard-core.client")

STATUS_MESSAGES = {
    401: "Authentication failed. Check your Productboard API token.",
    403: "Access denied by Productboard API. Verify token permissions.",
    404: "Requested Productboard resource was not found.",
    429: "Productboard API rate limit reached. Please retry shortly.",
}


def encode_segment(value: Any) -> str:
    """Encode an identifier as a single URL path segment."""
    return quote(str(value), safe="")


def encode_query(query: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Drop absent/empty query values and stringify the rest."""
    params: dict[str, str] = {}
    for key, value in (query or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


def extract_error_message(payload: Any, fallback: str) -> str:
    """Pull the most specific message out of a Productboard error payload."""
    if not isinstance(payload, dict):
        return fallback

    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message

    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]

    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, str):
            return first
        if isinstance(first, dict):
            if isinstance(first.get("message"), str):
                return first["message"]
            if isinstance(first.get("detail"), str):
                return first["detail"]

    return fallback


def parse_retry_after(header: Optional[str]) -> Optional[float]:
    """Parse a retry-after header given in seconds; None unless finite."""
    if not header:
        return None
    try:
        seconds = float(header)
    except ValueError:
        return None
    if not math.isfinite(seconds):
        return None
    return int(seconds) if seconds.is_integer() else seconds


def build_api_error(response: httpx.Response, payload: Any, raw_text: Optional[str]) -> ProductboardApiError:
    """Classify a non-2xx response."""
    status = response.status_code
    message = STATUS_MESSAGES.get(status) or extract_error_message(
        payload, raw_text or f"Productboard API returned HTTP {status}."
    )
    retry_after = parse_retry_after(response.headers.get("retry-after"))

    return ProductboardApiError(
        message,
        status=status,
        details=payload if payload is not None else raw_text,
        retry_after=retry_after,
    )


class ProductboardClient:
    """Async client for the Productboard REST API.

    Wraps one ``httpx.AsyncClient`` rooted at ``settings.base_url``; use it as
    an async context manager so the connection pool is closed on exit.
    ``transport`` replaces the network layer (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.base_url = self.settings.base_url
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "X-Version": self.settings.api_version,
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "ProductboardClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: Optional[str] = None,
        *,
        query: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        absolute_url: Optional[str] = None,
    ) -> Any:
        """Issue one request and return the decoded payload ({} when empty).

        ``path`` is relative to the base URL. ``absolute_url`` is a continuation
        link used as returned; query parameters are ignored for it since the
        link already carries them.
        """
        url = absolute_url or path or ""
        params = None if absolute_url else encode_query(query)
        # Token is read per request.
        headers = {"Authorization": f"Bearer {get_api_token()}"}

        logger.debug(f"{method} {url} params={params}")
        try:
            response = await self._http.request(method, url, params=params, headers=headers, json=body)
        except httpx.RequestError as e:
            logger.error(f"Network error during {method} {url}: {type(e).__name__}: {e}")
            raise TransportError(
                "Network error while contacting Productboard API.",
                details=str(e) or type(e).__name__,
            ) from e

        raw_text = response.text
        payload = None
        if raw_text:
            try:
                payload = response.json()
            except ValueError:
                payload = None

        if not response.is_success:
            logger.warning(f"{method} {response.request.url} returned HTTP {response.status_code}")
            raise build_api_error(response, payload, raw_text or None)

        return payload if payload is not None else {}

    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", path, query=query)

    async def post(self, path: str, body: Any = None, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("POST", path, query=query, body=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self.request("PATCH", path, body=body)

    async def put(self, path: str, body: Any = None, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("PUT", path, query=query, body=body)

    async def delete(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("DELETE", path, query=query)

    async def get_data(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        """GET a single resource and return its ``data`` member."""
        payload = await self.get(path, query=query)
        return data_of(payload)


def data_of(payload: Any) -> Any:
    """Return ``payload["data"]`` or None."""
    if isinstance(payload, dict):
        return payload.get("data")
    return None
