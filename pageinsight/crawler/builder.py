"""
Crawler Builder - Fluent API for building crawlers with features
"""

from pathlib import Path
from typing import List, Optional, Dict, Any, Union
from .base import BaseCrawler
from ..config import CrawlerInput, ProxyConfiguration, DEFAULT_STORAGE_DIR
from ..error_handler import RetryConfig
from ..features.data_quality_feature import DataQualityFeature
from ..features.analytics_feature import AnalyticsFeature
from ..fetchers import PageFetcher, BrowserFetcher, HttpFetcher
from ..monitoring import LogManager
from ..storage import Dataset, KeyValueStore


class CrawlerBuilder:
    """Builder for creating crawlers with various features"""

    def __init__(self, start_urls: List[str]):
        self.start_urls = start_urls
        self._max_concurrency = 5
        self._max_items = 1000
        self._quality_check = False
        self._analytics = False
        self._use_browser = True
        self._headless = True
        self._proxy: Optional[ProxyConfiguration] = None
        self._fetcher: Optional[PageFetcher] = None
        self._storage_dir: Path = Path(DEFAULT_STORAGE_DIR)
        self._retry_config = RetryConfig()
        self._request_handler_timeout = 120.0
        self._configuration: Dict[str, Any] = {}
        self._log_manager: Optional[LogManager] = None
        self._report_interval: Optional[float] = 30.0

    @classmethod
    def from_input(cls, crawler_input: CrawlerInput,
                   storage_dir: Union[str, Path] = DEFAULT_STORAGE_DIR) -> 'CrawlerBuilder':
        """Builder preconfigured from a validated input"""
        return (cls(crawler_input.start_urls)
                .max_concurrency(crawler_input.max_concurrency)
                .max_items(crawler_input.max_items)
                .with_quality_check(crawler_input.data_quality_check)
                .with_analytics(crawler_input.enable_analytics)
                .use_browser(crawler_input.use_browser, headless=crawler_input.headless)
                .with_proxy(crawler_input.proxy())
                .max_request_retries(crawler_input.max_request_retries)
                .request_handler_timeout(crawler_input.request_handler_timeout_secs)
                .storage_dir(storage_dir)
                .configuration(crawler_input.snapshot()))

    def max_concurrency(self, count: int):
        """Set the number of pages processed in parallel"""
        self._max_concurrency = count
        return self

    def max_items(self, count: int):
        """Set maximum URLs to process"""
        self._max_items = count
        return self

    def with_quality_check(self, enable: bool = True):
        """Attach a data quality score to each record"""
        self._quality_check = enable
        return self

    def with_analytics(self, enable: bool = True):
        """Attach derived content metrics to each record"""
        self._analytics = enable
        return self

    def use_browser(self, enable: bool = True, headless: bool = True):
        """Render pages in Chromium (default) or download raw HTML"""
        self._use_browser = enable
        self._headless = headless
        return self

    def with_proxy(self, proxy: Optional[ProxyConfiguration]):
        self._proxy = proxy
        return self

    def with_fetcher(self, fetcher: PageFetcher):
        """Use a prebuilt fetcher instead of the browser/HTTP default"""
        self._fetcher = fetcher
        return self

    def storage_dir(self, path: Union[str, Path]):
        self._storage_dir = Path(path)
        return self

    def max_request_retries(self, count: int):
        self._retry_config.max_retries = count
        return self

    def retry_delay(self, base_delay: float, jitter: bool = True):
        self._retry_config.base_delay = base_delay
        self._retry_config.jitter = jitter
        return self

    def request_handler_timeout(self, seconds: float):
        self._request_handler_timeout = seconds
        return self

    def configuration(self, snapshot: Dict[str, Any]):
        """Configuration section written into the run report"""
        self._configuration = dict(snapshot)
        return self

    def with_log_manager(self, log_manager: LogManager):
        self._log_manager = log_manager
        return self

    def progress_reports(self, interval: Optional[float]):
        """Interval between progress blocks in seconds; None disables them"""
        self._report_interval = interval
        return self

    def _build_fetcher(self) -> PageFetcher:
        if self._fetcher is not None:
            return self._fetcher
        if self._use_browser:
            return BrowserFetcher(headless=self._headless, proxy=self._proxy)
        return HttpFetcher(proxy=self._proxy)

    def build(self) -> BaseCrawler:
        """Build the configured crawler with its start URLs queued"""
        crawler = BaseCrawler(
            fetcher=self._build_fetcher(),
            dataset=Dataset(self._storage_dir),
            key_value_store=KeyValueStore(self._storage_dir),
            max_concurrency=self._max_concurrency,
            max_items=self._max_items,
            retry_config=self._retry_config,
            request_handler_timeout=self._request_handler_timeout,
            configuration=self._configuration,
            log_manager=self._log_manager,
            report_interval=self._report_interval
        )

        # Quality is scored before analytics are attached
        if self._quality_check:
            crawler.add_feature(DataQualityFeature())
        if self._analytics:
            crawler.add_feature(AnalyticsFeature())

        crawler.add_requests(self.start_urls)
        return crawler
