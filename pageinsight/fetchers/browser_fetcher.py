"""
Browser Fetcher - Loads pages in headless Chromium through Playwright
"""

import logging
from typing import Optional
from playwright.async_api import async_playwright, TimeoutError as PlaywrightTimeoutError

from .base import PageFetcher
from ..config import ProxyConfiguration
from ..errors import FetchError
from ..extraction import extract_fields
from ..models import ExtractedRecord

logger = logging.getLogger(__name__)

NAVIGATION_TIMEOUT_MS = 60000
READY_TIMEOUT_MS = 30000
SETTLE_DELAY_MS = 2000


class BrowserFetcher(PageFetcher):
    """Fetcher that renders each URL in its own browser context"""

    def __init__(self, headless: bool = True, proxy: Optional[ProxyConfiguration] = None,
                 viewport_width: int = 1920, viewport_height: int = 1080):
        self.headless = headless
        self.proxy = proxy or ProxyConfiguration()
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.playwright = None
        self.browser = None

    async def start(self):
        logger.info("Starting browser")

        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(
            headless=self.headless,
            args=[
                '--no-sandbox',
                '--disable-dev-shm-usage',
                '--disable-gpu'
            ]
        )

    async def fetch(self, url: str) -> ExtractedRecord:
        if not self.browser:
            raise RuntimeError("BrowserFetcher.start() must be called before fetch()")

        context_options = {
            'viewport': {'width': self.viewport_width, 'height': self.viewport_height},
            'user_agent': 'Mozilla/5.0 (compatible; PageInsightCrawler/2.0) AppleWebKit/537.36'
        }
        proxy_url = self.proxy.new_url()
        if proxy_url:
            context_options['proxy'] = {'server': proxy_url}

        context = await self.browser.new_context(**context_options)
        try:
            page = await context.new_page()

            response = await page.goto(url, wait_until='domcontentloaded', timeout=NAVIGATION_TIMEOUT_MS)
            if response is not None and response.status >= 400:
                raise FetchError(f"HTTP {response.status}", status=response.status)

            try:
                await page.wait_for_selector('body', timeout=READY_TIMEOUT_MS)
            except PlaywrightTimeoutError as e:
                raise FetchError(f"Page not ready after {READY_TIMEOUT_MS}ms: {e}") from e

            await page.wait_for_timeout(SETTLE_DELAY_MS)

            return await extract_fields(page)
        finally:
            await context.close()

    async def close(self):
        logger.info("Closing browser")
        try:
            if self.browser:
                await self.browser.close()
            if self.playwright:
                await self.playwright.stop()
        except Exception as e:
            logger.warning(f"Error closing browser: {e}")
        finally:
            self.browser = None
            self.playwright = None
