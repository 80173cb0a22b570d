"""HTTP transport for queue requests with strict status checking."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from types import MappingProxyType
from typing import Any

import httpx

from .exceptions import TransportError, TransportTimeoutError, UnexpectedStatusError
from .models import QueueRequest


def _parse_error_body(content: bytes) -> tuple[str | None, str | None]:
    """Pull ``Code`` and ``Message`` out of a storage ``<Error>`` document."""
    if not content:
        return None, None
    try:
        root = ET.fromstring(content)
    except ET.ParseError:
        return None, None
    code = root.findtext("Code")
    message = root.findtext("Message")
    return code, message.strip() if message else None


class QueueTransport:
    """Sends one request and requires one exact status code. Never retries.

    An injected ``httpx_client`` is used as configured and never closed here.
    Otherwise an owned client is created on first use; ``transport`` lets
    callers plug an httpx transport into that owned client.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        follow_redirects: bool = False,
        httpx_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be greater than 0")
        self.timeout = float(timeout)
        self._owns_client = httpx_client is None
        self._httpx = httpx_client
        self._client_kwargs: dict[str, Any] = {
            "timeout": self.timeout,
            "follow_redirects": follow_redirects,
            "trust_env": False,
            "transport": transport,
        }

    @property
    def is_closed(self) -> bool:
        return self._httpx is None or self._httpx.is_closed

    def _client(self) -> httpx.AsyncClient:
        if self._httpx is None:
            self._httpx = httpx.AsyncClient(**self._client_kwargs)
        return self._httpx

    async def aclose(self) -> None:
        if self._owns_client and self._httpx is not None:
            await self._httpx.aclose()

    async def send(self, request: QueueRequest, expected_status: int) -> httpx.Response:
        try:
            response = await self._client().request(
                method=request.method,
                url=httpx.URL(request.url),
                headers=dict(request.headers),
                content=request.body.encode("utf-8") if request.body is not None else None,
            )
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError("Request timed out", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Network error: {exc}", cause=exc) from exc

        if response.status_code != expected_status:
            self._raise_unexpected_status(response, expected_status)
        return response

    @staticmethod
    def _raise_unexpected_status(response: httpx.Response, expected_status: int) -> None:
        raw_body: str | None
        try:
            raw_body = response.text
        except (UnicodeDecodeError, httpx.ResponseNotRead):
            raw_body = None

        body_code, body_message = _parse_error_body(response.content)
        error_code = response.headers.get("x-ms-error-code") or body_code
        message = body_message or response.reason_phrase or "unexpected status"

        kwargs: dict[str, Any] = {
            "status_code": response.status_code,
            "expected_status": expected_status,
            "error_code": error_code,
            "reason": response.reason_phrase,
            "body": raw_body,
            "headers": MappingProxyType(dict(response.headers)),
            "request_id": response.headers.get("x-ms-request-id"),
        }
        raise UnexpectedStatusError(message, **kwargs)
