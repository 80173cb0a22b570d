"""Async client for updating messages on a storage queue."""

from .client import QueueClient
from .exceptions import (
    AddressError,
    QueueStorageError,
    ResponseParseError,
    TransportError,
    TransportTimeoutError,
    UnexpectedStatusError,
)
from .models import (
    ClientRequestId,
    MessageReference,
    PopReceipt,
    QueueRequest,
    Timeout,
    UpdateMessageResponse,
    VisibilityTimeout,
)
from .options import UpdateMessageOptions
from .responses import parse_update_message_response
from .transport import QueueTransport
from .update_message import UpdateMessageBuilder, wrap_message_text

__all__ = [
    "AddressError",
    "ClientRequestId",
    "MessageReference",
    "PopReceipt",
    "QueueClient",
    "QueueRequest",
    "QueueStorageError",
    "QueueTransport",
    "ResponseParseError",
    "Timeout",
    "TransportError",
    "TransportTimeoutError",
    "UnexpectedStatusError",
    "UpdateMessageBuilder",
    "UpdateMessageOptions",
    "UpdateMessageResponse",
    "VisibilityTimeout",
    "parse_update_message_response",
    "wrap_message_text",
]
