"""Tests for the browser and HTTP fetchers, without a real browser."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import web
from aiohttp import test_utils
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pageinsight.config import ProxyConfiguration
from pageinsight.errors import FetchError
from pageinsight.fetchers import BrowserFetcher, HttpFetcher
from pageinsight.fetchers.browser_fetcher import READY_TIMEOUT_MS, SETTLE_DELAY_MS
from tests.helpers import SAMPLE_HTML


def make_browser(page):
    context = AsyncMock()
    context.new_page.return_value = page
    browser = AsyncMock()
    browser.new_context.return_value = context
    return browser, context


def make_page(status=200):
    page = AsyncMock()
    page.goto.return_value = MagicMock(status=status)
    page.evaluate.return_value = {
        "url": "https://example.com/",
        "title": "Example Domain",
        "content": "Example",
        "links": 1,
        "images": 0,
        "headings": [],
        "metaDescription": "",
        "timestamp": "2026-01-01T00:00:00.000Z"
    }
    return page


class TestBrowserFetcher:

    @pytest.mark.asyncio
    async def test_waits_for_body_then_settles(self):
        page = make_page()
        fetcher = BrowserFetcher()
        fetcher.browser, context = make_browser(page)

        record = await fetcher.fetch("https://example.com")

        page.wait_for_selector.assert_awaited_once_with("body", timeout=READY_TIMEOUT_MS)
        page.wait_for_timeout.assert_awaited_once_with(SETTLE_DELAY_MS)
        context.close.assert_awaited_once()
        assert record.title == "Example Domain"

    @pytest.mark.asyncio
    async def test_readiness_timeout_is_a_fetch_failure(self):
        page = make_page()
        page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout 30000ms exceeded")
        fetcher = BrowserFetcher()
        fetcher.browser, context = make_browser(page)

        with pytest.raises(FetchError):
            await fetcher.fetch("https://slow.example")

        page.evaluate.assert_not_awaited()
        context.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_error_status_is_a_fetch_failure(self):
        page = make_page(status=503)
        fetcher = BrowserFetcher()
        fetcher.browser, _ = make_browser(page)

        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch("https://down.example")

        assert exc_info.value.status == 503

    @pytest.mark.asyncio
    async def test_proxy_is_applied_per_context(self):
        page = make_page()
        fetcher = BrowserFetcher(proxy=ProxyConfiguration(raw={"proxyUrls": ["http://proxy:8000"]}))
        fetcher.browser, _ = make_browser(page)

        await fetcher.fetch("https://example.com")

        _, kwargs = fetcher.browser.new_context.call_args
        assert kwargs["proxy"] == {"server": "http://proxy:8000"}

    @pytest.mark.asyncio
    async def test_fetch_requires_start(self):
        with pytest.raises(RuntimeError):
            await BrowserFetcher().fetch("https://example.com")


class TestHttpFetcher:

    @staticmethod
    def make_app():
        async def page(request):
            return web.Response(text=SAMPLE_HTML, content_type="text/html")

        async def missing(request):
            return web.Response(status=404)

        app = web.Application()
        app.router.add_get("/page", page)
        app.router.add_get("/missing", missing)
        return app

    @pytest.mark.asyncio
    async def test_extracts_from_html(self):
        async with test_utils.TestServer(self.make_app()) as server:
            async with HttpFetcher() as fetcher:
                record = await fetcher.fetch(str(server.make_url("/page")))

        assert record.title == "Example Domain"
        assert record.links == 2
        assert record.url.endswith("/page")

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        async with test_utils.TestServer(self.make_app()) as server:
            async with HttpFetcher() as fetcher:
                with pytest.raises(FetchError) as exc_info:
                    await fetcher.fetch(str(server.make_url("/missing")))

        assert exc_info.value.status == 404
