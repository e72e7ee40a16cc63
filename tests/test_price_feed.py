"""
Gold price lookup: credential storage and quote fetching against a mock transport.
"""
import asyncio
import json
import logging
import os
import sys

import httpx
import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from gold_calculator.services import price_feed
from gold_calculator.services.price_feed import CredentialStore, GoldPriceService

ENDPOINT = "https://scrape.example.test/v1/scrape"
PAGE_URL = "https://prices.example.test/gold"


@pytest.fixture
def store(tmp_path):
    return CredentialStore(tmp_path / "creds" / "key")


def make_service(store, handler):
    return GoldPriceService(
        credentials=store,
        endpoint=ENDPOINT,
        page_url=PAGE_URL,
        timeout=2,
        transport=httpx.MockTransport(handler),
    )


def test_credential_store_round_trip(store):
    assert store.get() is None

    store.save("  fc-secret  ")
    assert store.get() == "fc-secret"

    store.clear()
    assert store.get() is None
    store.clear()  # already gone


@pytest.mark.parametrize("blank", ["", "   ", None])
def test_credential_store_rejects_blank(store, blank):
    with pytest.raises(ValueError):
        store.save(blank)
    assert store.get() is None


def test_missing_credential_skips_request(store):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"success": True, "data": {}})

    result = asyncio.run(make_service(store, handler).fetch_quote())

    assert not result.success
    assert result.error_code == price_feed.MISSING_CREDENTIAL
    assert calls == []


def test_successful_quote(store):
    store.save("fc-secret")

    def handler(request):
        assert str(request.url) == ENDPOINT
        assert request.headers["Authorization"] == "Bearer fc-secret"
        body = json.loads(request.content)
        assert body["url"] == PAGE_URL
        return httpx.Response(200, json={"success": True, "data": {"markdown": "Gold 2,650.10 USD/oz"}})

    result = asyncio.run(make_service(store, handler).fetch_quote())

    assert result.success
    assert result.data == {"markdown": "Gold 2,650.10 USD/oz"}
    assert result.error_message is None


def test_sync_wrapper(store):
    store.save("fc-secret")
    service = make_service(store, lambda request: httpx.Response(200, json={"success": True, "data": {"k": 1}}))

    assert service.fetch_quote_sync().data == {"k": 1}


def test_http_error_includes_detail(store):
    store.save("bad-key")
    service = make_service(store, lambda request: httpx.Response(401, json={"error": "Unauthorized"}))

    result = asyncio.run(service.fetch_quote())

    assert not result.success
    assert result.error_code == price_feed.HTTP_ERROR
    assert "401" in result.error_message
    assert "Unauthorized" in result.error_message


def test_http_error_without_json(store):
    store.save("k")
    service = make_service(store, lambda request: httpx.Response(503, text="Service Unavailable"))

    result = asyncio.run(service.fetch_quote())
    assert result.error_code == price_feed.HTTP_ERROR
    assert "503" in result.error_message


def test_unsuccessful_payload(store):
    store.save("k")
    service = make_service(store, lambda request: httpx.Response(200, json={"success": False, "error": "Page blocked"}))

    result = asyncio.run(service.fetch_quote())
    assert result.error_code == price_feed.BAD_RESPONSE
    assert result.error_message == "Page blocked"


@pytest.mark.parametrize("response", [
    httpx.Response(200, text="<html>not json</html>"),
    httpx.Response(200, json=["unexpected"]),
    httpx.Response(200, json={"success": True}),
])
def test_unusable_payload(store, response):
    store.save("k")
    result = asyncio.run(make_service(store, lambda request: response).fetch_quote())

    assert not result.success
    assert result.error_code == price_feed.BAD_RESPONSE


def test_timeout(store):
    store.save("k")

    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = asyncio.run(make_service(store, handler).fetch_quote())
    assert result.error_code == price_feed.TIMEOUT


def test_failures_logged_with_lazy_arguments(store, caplog, monkeypatch):
    store.save("k")
    # configure_logging() stops propagation to the root logger caplog listens on
    monkeypatch.setattr(logging.getLogger("gold_calculator"), "propagate", True)

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with caplog.at_level("ERROR", logger=price_feed.__name__):
        asyncio.run(make_service(store, handler).fetch_quote())

    record = caplog.records[-1]
    assert record.msg == "Gold price lookup failed: %s"
    assert "connection refused" in record.getMessage()


def test_network_error(store):
    store.save("k")

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = asyncio.run(make_service(store, handler).fetch_quote())
    assert result.error_code == price_feed.NETWORK_ERROR
    assert "connection refused" in result.error_message


def test_cancellation_propagates(store):
    store.save("k")
    started = asyncio.Event()

    async def handler(request):
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200, json={"success": True, "data": {}})

    async def run():
        task = asyncio.create_task(make_service(store, handler).fetch_quote())
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run())


def test_from_settings(tmp_path):
    from gold_calculator.config.settings import Settings

    settings = Settings(project_root=tmp_path, credential_path=tmp_path / "key", quote_timeout=3)
    service = GoldPriceService.from_settings(settings)

    assert service.credentials.path == tmp_path / "key"
    assert service.timeout == 3
    assert not service.has_credential()
