"""Command line entry point for updating a queue message."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from queue_storage_sdk.client import QueueClient
from queue_storage_sdk.exceptions import QueueStorageError
from queue_storage_sdk.models import PopReceipt, UpdateMessageResponse


def _parse_header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"header must look like NAME=VALUE, got {raw!r}")
    return name.strip(), value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="queue-update-message")
    parser.add_argument("--queue-url", required=True)
    parser.add_argument("--message-id", required=True)
    parser.add_argument("--pop-receipt", required=True)
    parser.add_argument("--visibility-timeout", required=True, type=int)
    parser.add_argument("--timeout", type=int)
    parser.add_argument("--client-request-id")
    parser.add_argument("--header", action="append", type=_parse_header, default=[])
    parser.add_argument("--allow-http", action="store_true")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("body")
    return parser


async def _update(args: argparse.Namespace) -> UpdateMessageResponse:
    async with QueueClient.from_queue_url(
        args.queue_url,
        headers=dict(args.header),
        allow_http=args.allow_http,
    ) as client:
        builder = (
            client.update_message(args.visibility_timeout)
            .with_timeout(args.timeout)
            .with_client_request_id(args.client_request_id)
        )
        return await builder.execute(PopReceipt(args.message_id, args.pop_receipt), args.body)


def _main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(_update(args))
    except QueueStorageError as exc:
        print(f"Update failed ({type(exc).__name__}): {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result.model_dump(mode="json"), indent=2))
    return 0


def main() -> None:
    raise SystemExit(_main())
