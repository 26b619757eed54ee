"""
HTTP Fetcher - Downloads raw HTML with aiohttp, no JavaScript rendering
"""

import logging
from typing import Optional
import aiohttp

from .base import PageFetcher
from ..config import ProxyConfiguration
from ..errors import FetchError
from ..extraction import extract_fields_from_html
from ..models import ExtractedRecord

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECS = 30


class HttpFetcher(PageFetcher):
    """Fetcher for static pages"""

    def __init__(self, proxy: Optional[ProxyConfiguration] = None, timeout: float = REQUEST_TIMEOUT_SECS):
        self.proxy = proxy or ProxyConfiguration()
        self.timeout = timeout
        self.session = None

    async def start(self):
        self.session = aiohttp.ClientSession(
            headers={'User-Agent': 'PageInsightCrawler/2.0'},
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )

    async def fetch(self, url: str) -> ExtractedRecord:
        if not self.session:
            raise RuntimeError("HttpFetcher.start() must be called before fetch()")

        async with self.session.get(url, proxy=self.proxy.new_url()) as response:
            if response.status >= 400:
                raise FetchError(f"HTTP {response.status}", status=response.status)

            html = await response.text()
            return extract_fields_from_html(html, str(response.url))

    async def close(self):
        if self.session:
            await self.session.close()
            self.session = None
