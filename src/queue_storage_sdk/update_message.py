"""Update-message operation: replace an in-flight message's body and visibility."""

from __future__ import annotations

import datetime as _dt
import logging
from typing import Callable
from urllib.parse import quote, urlencode

import httpx

from .exceptions import AddressError, QueueStorageError, ResponseParseError
from .models import (
    ClientRequestId,
    MessageReference,
    QueueRequest,
    Timeout,
    UpdateMessageResponse,
    VisibilityTimeout,
)
from .options import UpdateMessageOptions
from .responses import parse_update_message_response
from .security import sanitize_headers, validate_header_value, validate_url_component

ResponseParser = Callable[[httpx.Response], UpdateMessageResponse]

MESSAGE_ENVELOPE = "<QueueMessage><MessageText>{}</MessageText></QueueMessage>"
EXPECTED_STATUS = 204


def wrap_message_text(new_body: str) -> str:
    """Wrap text in the queue message envelope.

    The text is inserted as-is. Callers whose text contains ``<``, ``>`` or
    ``&`` must escape it themselves.
    """
    return MESSAGE_ENVELOPE.format(new_body)


class UpdateMessageBuilder:
    """Builds and executes one update-message call.

    Builders are immutable; the ``with_*`` methods return new builders, so a
    base builder can be shared between concurrent calls.
    """

    def __init__(
        self,
        options: UpdateMessageOptions,
        *,
        logger: logging.Logger | None = None,
        response_parser: ResponseParser = parse_update_message_response,
    ) -> None:
        self.options = options
        self.logger = logger or options.queue_client.logger
        self.response_parser = response_parser

    def _with_options(self, options: UpdateMessageOptions) -> "UpdateMessageBuilder":
        return UpdateMessageBuilder(options, logger=self.logger, response_parser=self.response_parser)

    def with_visibility_timeout(self, value: VisibilityTimeout | int | _dt.timedelta) -> "UpdateMessageBuilder":
        return self._with_options(self.options.with_visibility_timeout(value))

    def with_timeout(self, value: Timeout | int | _dt.timedelta | None) -> "UpdateMessageBuilder":
        return self._with_options(self.options.with_timeout(value))

    def with_client_request_id(self, value: ClientRequestId | str | None) -> "UpdateMessageBuilder":
        return self._with_options(self.options.with_client_request_id(value))

    def message_url(self, reference: MessageReference) -> str:
        queue_url = self.options.queue_client.queue_url()
        try:
            message_id = reference.message_id()
            pop_receipt = reference.pop_receipt()
            validate_url_component("message id", message_id)
            validate_url_component("pop receipt", pop_receipt)
        except (ValueError, AttributeError) as exc:
            raise AddressError(f"Invalid message reference: {exc}", cause=exc) from exc

        pairs: list[tuple[str, str]] = [("popreceipt", pop_receipt)]
        self.options.visibility_timeout.append_to_query(pairs)
        if self.options.timeout is not None:
            self.options.timeout.append_to_query(pairs)

        path = f"{queue_url.rstrip('/')}/messages/{quote(message_id, safe='')}"
        return f"{path}?{urlencode(pairs)}"

    def build_request(self, reference: MessageReference, new_body: str) -> QueueRequest:
        url = self.message_url(reference)
        headers = self.options.queue_client.default_headers()
        headers["Content-Type"] = "application/xml"
        if self.options.client_request_id is not None:
            self.options.client_request_id.add_to_headers(headers)
        try:
            for name, value in headers.items():
                validate_header_value(name, value)
        except ValueError as exc:
            raise AddressError(f"Invalid request header: {exc}", cause=exc) from exc
        return QueueRequest(method="PUT", url=url, headers=headers, body=wrap_message_text(new_body))

    async def execute(self, reference: MessageReference, new_body: str) -> UpdateMessageResponse:
        request = self.build_request(reference, new_body)
        self.logger.debug("url == %s", request.url)
        self.logger.debug("headers == %s", sanitize_headers(request.headers))
        self.logger.debug("message about to be put == %s", request.body)

        transport = self.options.queue_client.transport
        response = await transport.send(request, EXPECTED_STATUS)
        try:
            result = self.response_parser(response)
        except QueueStorageError:
            raise
        except Exception as exc:
            raise ResponseParseError(
                f"Could not resolve update-message response: {exc}",
                status_code=response.status_code,
                cause=exc,
            ) from exc
        self.logger.debug(
            "message %s updated, next visible at %s",
            reference.message_id(),
            result.time_next_visible.isoformat(),
        )
        return result
