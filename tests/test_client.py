from __future__ import annotations

import asyncio

import httpx
import pytest

from queue_storage_sdk.client import QueueClient
from queue_storage_sdk.exceptions import AddressError
from queue_storage_sdk.models import PopReceipt


def test_from_queue_url_splits_account_and_queue() -> None:
    client = QueueClient.from_queue_url("https://acct.example/myqueue/")

    assert client.account_url == "https://acct.example"
    assert client.queue_name == "myqueue"
    assert client.queue_url() == "https://acct.example/myqueue"


def test_from_queue_url_keeps_account_path() -> None:
    client = QueueClient.from_queue_url("http://127.0.0.1:10001/devstoreaccount1/jobs")

    assert client.queue_url() == "http://127.0.0.1:10001/devstoreaccount1/jobs"


def test_from_queue_url_requires_queue_name() -> None:
    with pytest.raises(AddressError):
        QueueClient.from_queue_url("https://acct.example/")


def test_account_url_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("STORAGE_QUEUE_ACCOUNT_URL", "https://env.example/")
    client = QueueClient("orders")

    assert client.queue_url() == "https://env.example/orders"


def test_missing_account_url_is_an_address_error(monkeypatch) -> None:
    monkeypatch.delenv("STORAGE_QUEUE_ACCOUNT_URL", raising=False)
    client = QueueClient("orders")

    with pytest.raises(AddressError, match="not configured"):
        client.queue_url()


def test_http_account_url_requires_opt_in() -> None:
    with pytest.raises(AddressError, match="Non-HTTPS"):
        QueueClient("orders", account_url="http://acct.example").queue_url()

    allowed = QueueClient("orders", account_url="http://acct.example", allow_http=True)
    assert allowed.queue_url() == "http://acct.example/orders"


def test_default_headers_are_copied() -> None:
    client = QueueClient("orders", account_url="https://acct.example", headers={"Authorization": "Bearer t"})
    headers = client.default_headers()
    headers["x-extra"] = "1"

    assert client.default_headers() == {
        "x-ms-version": "2019-12-12",
        "User-Agent": "queue-storage-sdk/0.1.0",
        "Authorization": "Bearer t",
    }


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValueError, match="greater than 0"):
        QueueClient("orders", account_url="https://acct.example", timeout=0)


def test_injected_httpx_client_is_left_open() -> None:
    async def use_client() -> bool:
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(204))) as httpx_client:
            async with QueueClient("orders", account_url="https://acct.example", httpx_client=httpx_client):
                pass
            return httpx_client.is_closed

    assert asyncio.run(use_client()) is False


def test_owned_http_client_is_created_on_first_send_and_closed_on_exit() -> None:
    client = QueueClient(
        "orders",
        account_url="https://acct.example",
        transport=httpx.MockTransport(lambda request: httpx.Response(204)),
    )
    assert client.transport.is_closed

    async def use_client() -> bool:
        async with client:
            builder = client.update_message(30)
            request = builder.build_request(PopReceipt("m1", "r1"), "x")
            await client.transport.send(request, 204)
            return client.transport.is_closed

    assert asyncio.run(use_client()) is False
    assert client.transport.is_closed
