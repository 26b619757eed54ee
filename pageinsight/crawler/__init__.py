"""
Crawler - request queue, worker pool and builder
"""

from .base import BaseCrawler, REPORT_KEY
from .builder import CrawlerBuilder
from .request_queue import RequestQueue, unique_key
from .result import CrawlResult

__all__ = ['BaseCrawler', 'CrawlerBuilder', 'RequestQueue', 'CrawlResult', 'REPORT_KEY', 'unique_key']
