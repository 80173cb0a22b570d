"""Errors raised by queue operations.

Every failure of an operation is one of four kinds: the request could not be
built (``AddressError``), the request could not be delivered
(``TransportError``), the service answered with the wrong status
(``UnexpectedStatusError``), or a success response could not be read
(``ResponseParseError``).
"""

from __future__ import annotations

from typing import Mapping


class QueueStorageError(Exception):
    """Common base; carries whatever the service told us, when it told us anything."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        expected_status: int | None = None,
        reason: str | None = None,
        error_code: str | None = None,
        request_id: str | None = None,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.expected_status = expected_status
        self.reason = reason
        self.error_code = error_code
        self.request_id = request_id
        self.headers = {} if headers is None else dict(headers)
        self.body = body
        self.cause = cause

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        status = f"{self.status_code} {self.error_code or self.reason or ''}".rstrip()
        if self.expected_status is not None:
            status += f" (expected {self.expected_status})"
        return f"{status}: {self.message}"


class AddressError(QueueStorageError):
    """Raised when the request URL or headers cannot be constructed locally."""


class TransportError(QueueStorageError):
    """Raised for connection-level failures while sending a request."""


class TransportTimeoutError(TransportError):
    """Raised when a request exceeds the configured client timeout."""


class UnexpectedStatusError(QueueStorageError):
    """Raised when the service answers with a status other than the required one."""


class ResponseParseError(QueueStorageError):
    """Raised when a successful response cannot be resolved into a typed result."""
