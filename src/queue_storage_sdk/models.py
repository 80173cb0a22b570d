"""Typed request values and response models for queue message operations."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableSequence, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .security import parse_http_date


QueryPairs = MutableSequence[tuple[str, str]]


@runtime_checkable
class MessageReference(Protocol):
    """Anything that addresses one received message instance."""

    def message_id(self) -> str: ...

    def pop_receipt(self) -> str: ...


@dataclass(frozen=True)
class PopReceipt:
    """Message id and pop receipt pair as returned by a get-messages call."""

    id: str
    receipt: str

    def message_id(self) -> str:
        return self.id

    def pop_receipt(self) -> str:
        return self.receipt

    @classmethod
    def from_message(cls, message: Mapping[str, Any]) -> "PopReceipt":
        """Build from a received message mapping (``MessageId``/``PopReceipt`` keys)."""
        message_id = message.get("MessageId", message.get("message_id"))
        receipt = message.get("PopReceipt", message.get("pop_receipt"))
        if message_id is None or receipt is None:
            raise ValueError("message must carry both a message id and a pop receipt")
        return cls(id=str(message_id), receipt=str(receipt))


def _coerce_seconds(value: int | _dt.timedelta) -> int:
    if isinstance(value, bool):
        raise TypeError("seconds must be an int or timedelta, not bool")
    if isinstance(value, _dt.timedelta):
        return int(value.total_seconds())
    if isinstance(value, int):
        return value
    raise TypeError(f"seconds must be an int or timedelta, got {type(value).__name__}")


@dataclass(frozen=True)
class VisibilityTimeout:
    seconds: int

    @classmethod
    def of(cls, value: "VisibilityTimeout | int | _dt.timedelta") -> "VisibilityTimeout":
        if isinstance(value, cls):
            return value
        return cls(_coerce_seconds(value))

    def append_to_query(self, pairs: QueryPairs) -> None:
        pairs.append(("visibilitytimeout", str(self.seconds)))


@dataclass(frozen=True)
class Timeout:
    """Server-side operation timeout, sent as the ``timeout`` query parameter."""

    seconds: int

    @classmethod
    def of(cls, value: "Timeout | int | _dt.timedelta") -> "Timeout":
        if isinstance(value, cls):
            return value
        return cls(_coerce_seconds(value))

    def append_to_query(self, pairs: QueryPairs) -> None:
        pairs.append(("timeout", str(self.seconds)))


@dataclass(frozen=True)
class ClientRequestId:
    value: str

    header_name = "x-ms-client-request-id"

    @classmethod
    def of(cls, value: "ClientRequestId | str") -> "ClientRequestId":
        if isinstance(value, cls):
            return value
        return cls(str(value))

    def add_to_headers(self, headers: dict[str, str]) -> None:
        headers[self.header_name] = self.value


@dataclass(frozen=True)
class QueueRequest:
    """A fully assembled HTTP request, ready to hand to the transport."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None


class QueueStorageModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, populate_by_name=True)


class UpdateMessageResponse(QueueStorageModel):
    """Result of a successful update, read from the response headers."""

    pop_receipt: str = Field(alias="x-ms-popreceipt", min_length=1)
    time_next_visible: _dt.datetime = Field(alias="x-ms-time-next-visible")
    request_id: str | None = Field(default=None, alias="x-ms-request-id")
    client_request_id: str | None = Field(default=None, alias="x-ms-client-request-id")
    version: str | None = Field(default=None, alias="x-ms-version")
    date: _dt.datetime | None = Field(default=None, alias="date")
    server: str | None = Field(default=None, alias="server")

    @field_validator("time_next_visible", "date", mode="before")
    @classmethod
    def _parse_rfc1123(cls, value: Any) -> Any:
        if value is None or isinstance(value, _dt.datetime):
            return value
        parsed = parse_http_date(str(value))
        if parsed is None:
            raise ValueError(f"invalid HTTP date: {value!r}")
        return parsed
