"""Asynchronous client for a single storage queue."""

from __future__ import annotations

import datetime as _dt
import logging
import os
from typing import Mapping
from urllib.parse import quote, unquote, urlparse

import httpx

from .exceptions import AddressError
from .models import VisibilityTimeout
from .options import UpdateMessageOptions
from .security import validate_base_url, validate_url_component
from .transport import QueueTransport
from .update_message import UpdateMessageBuilder


def _normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    clean: dict[str, str] = {}
    for key, value in headers.items():
        clean[str(key)] = str(value)
    return clean


class QueueClient:
    """Owns the queue address, default headers, transport and logger."""

    default_timeout = 30.0
    default_api_version = "2019-12-12"
    user_agent = "queue-storage-sdk/0.1.0"

    def __init__(
        self,
        queue_name: str,
        *,
        account_url: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = default_timeout,
        api_version: str = default_api_version,
        follow_redirects: bool = False,
        httpx_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        allow_http: bool = False,
        logger: logging.Logger | None = None,
        account_url_env_var: str = "STORAGE_QUEUE_ACCOUNT_URL",
    ) -> None:
        self.queue_name = queue_name
        self.account_url = account_url or os.getenv(account_url_env_var)
        self.allow_http = allow_http
        self.api_version = api_version
        self.logger = logger or logging.getLogger("queue_storage_sdk")
        self._default_headers = {
            "x-ms-version": api_version,
            "User-Agent": self.user_agent,
        }
        if headers:
            self._default_headers.update(_normalize_headers(headers))
        self.transport = QueueTransport(
            timeout=timeout,
            follow_redirects=follow_redirects,
            httpx_client=httpx_client,
            transport=transport,
        )

    @classmethod
    def from_queue_url(cls, queue_url: str, **kwargs: object) -> "QueueClient":
        """Build a client from a full queue URL such as ``https://acct.example/myqueue``."""
        parsed = urlparse(queue_url)
        account_path, _, queue_name = parsed.path.rstrip("/").rpartition("/")
        if not parsed.scheme or not parsed.netloc or not queue_name:
            raise AddressError(f"Queue URL must name a queue: {queue_url!r}")
        account_url = f"{parsed.scheme}://{parsed.netloc}{account_path}"
        return cls(unquote(queue_name), account_url=account_url, **kwargs)  # type: ignore[arg-type]

    async def __aenter__(self) -> "QueueClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    def default_headers(self) -> dict[str, str]:
        return dict(self._default_headers)

    def queue_url(self) -> str:
        if not self.account_url:
            raise AddressError("Storage account URL is not configured")
        account_url = self.account_url.rstrip("/")
        try:
            validate_base_url(account_url, allow_http=self.allow_http)
            validate_url_component("queue name", self.queue_name)
        except ValueError as exc:
            raise AddressError(str(exc), cause=exc) from exc
        return f"{account_url}/{quote(self.queue_name, safe='')}"

    def update_message(
        self,
        visibility_timeout: VisibilityTimeout | int | _dt.timedelta,
        *,
        logger: logging.Logger | None = None,
    ) -> UpdateMessageBuilder:
        options = UpdateMessageOptions(
            queue_client=self,
            visibility_timeout=VisibilityTimeout.of(visibility_timeout),
        )
        return UpdateMessageBuilder(options, logger=logger)
