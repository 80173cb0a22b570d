"""Per-call settings for the update-message operation."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .models import ClientRequestId, Timeout, VisibilityTimeout

if TYPE_CHECKING:
    from .client import QueueClient


@dataclass(frozen=True)
class UpdateMessageOptions:
    queue_client: "QueueClient"
    visibility_timeout: VisibilityTimeout
    timeout: Timeout | None = None
    client_request_id: ClientRequestId | None = None

    def with_visibility_timeout(self, value: VisibilityTimeout | int | _dt.timedelta) -> "UpdateMessageOptions":
        return replace(self, visibility_timeout=VisibilityTimeout.of(value))

    def with_timeout(self, value: Timeout | int | _dt.timedelta | None) -> "UpdateMessageOptions":
        return replace(self, timeout=None if value is None else Timeout.of(value))

    def with_client_request_id(self, value: ClientRequestId | str | None) -> "UpdateMessageOptions":
        return replace(self, client_request_id=None if value is None else ClientRequestId.of(value))
