"""Resolution of raw HTTP responses into typed results."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from .exceptions import ResponseParseError
from .models import UpdateMessageResponse


def parse_update_message_response(response: httpx.Response) -> UpdateMessageResponse:
    headers = {key.lower(): value for key, value in response.headers.items()}
    try:
        return UpdateMessageResponse.model_validate(headers)
    except ValidationError as exc:
        raise ResponseParseError(
            "Could not read update-message result from response headers",
            status_code=response.status_code,
            headers=headers,
            request_id=headers.get("x-ms-request-id"),
            cause=exc,
        ) from exc
