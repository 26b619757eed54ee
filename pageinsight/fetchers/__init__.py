"""
Page fetchers: headless browser and plain HTTP
"""

from .base import PageFetcher
from .browser_fetcher import BrowserFetcher
from .http_fetcher import HttpFetcher

__all__ = ['PageFetcher', 'BrowserFetcher', 'HttpFetcher']
