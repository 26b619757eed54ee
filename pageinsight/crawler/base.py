"""
Base Crawler - Request queue, bounded worker pool and per-request handling
"""

import time
import asyncio
import logging
from typing import List, Optional, Dict, Any
from ..features.base import CrawlerFeature
from .result import CrawlResult
from .request_queue import RequestQueue
from ..errors import ConfigurationError
from ..error_handler import ErrorHandler, RetryConfig
from ..fetchers import PageFetcher
from ..models import ExtractedRecord, ErrorRecord, RecordMetadata, RunReport, utc_timestamp
from ..storage import Dataset, KeyValueStore
from ..monitoring import RunAggregator, ProgressReporter, LogManager
from ..monitoring.log_manager import REQUEST_SUCCEEDED, REQUEST_FAILED

logger = logging.getLogger(__name__)

REPORT_KEY = 'PERFORMANCE_REPORT'


class BaseCrawler:
    """
    Crawler that loads every queued URL once, enriches the extracted record
    through its features and writes exactly one dataset item per URL
    """

    def __init__(self, fetcher: PageFetcher, dataset: Dataset, key_value_store: KeyValueStore,
                 max_concurrency: int = 5, max_items: int = 1000,
                 retry_config: Optional[RetryConfig] = None,
                 request_handler_timeout: float = 120.0,
                 configuration: Optional[Dict[str, Any]] = None,
                 log_manager: Optional[LogManager] = None,
                 report_interval: Optional[float] = 30.0):
        self.fetcher = fetcher
        self.dataset = dataset
        self.key_value_store = key_value_store
        self.max_concurrency = max_concurrency
        self.request_handler_timeout = request_handler_timeout
        self.configuration = dict(configuration or {})
        self.features: List[CrawlerFeature] = []

        self.request_queue = RequestQueue(max_items=max_items)
        self.error_handler = ErrorHandler(retry_config or RetryConfig())

        self.log_manager = log_manager
        self.aggregator = RunAggregator()
        self.progress_reporter = ProgressReporter(self.aggregator, report_interval) if report_interval else None

        self.report: Optional[RunReport] = None

    def add_feature(self, feature: CrawlerFeature):
        """Add a feature to this crawler"""
        self.features.append(feature)
        return self

    def add_requests(self, urls: List[str]) -> int:
        """Queue URLs; duplicates by unique key are dropped"""
        return self.request_queue.add_requests(urls)

    async def run(self) -> RunReport:
        """Process the queue and persist the run report

        Raises:
            ConfigurationError: if nothing was queued
        """
        if not self.request_queue.pending_count:
            raise ConfigurationError('No URLs queued; add start URLs before running the crawler.')

        self.aggregator = RunAggregator()
        if self.progress_reporter:
            self.progress_reporter.aggregator = self.aggregator

        async with self.fetcher:
            for feature in self.features:
                await feature.initialize(self)

            if self.progress_reporter:
                await self.progress_reporter.start_reporting()

            workers = [
                asyncio.create_task(self._worker(), name=f"crawler-worker-{i}")
                for i in range(self.max_concurrency)
            ]
            try:
                await asyncio.gather(*workers)
            finally:
                # Siblings must not outlive the fetcher
                for worker in workers:
                    if not worker.done():
                        worker.cancel()
                await asyncio.gather(*workers, return_exceptions=True)

                if self.progress_reporter:
                    await self.progress_reporter.stop_reporting()

                for feature in self.features:
                    await feature.finalize(self)

        if self.request_queue.pending_count:
            logger.info(f"Item limit reached; {self.request_queue.pending_count} URL(s) left unprocessed")

        self.report = self.aggregator.build_report(self.configuration)
        await self.key_value_store.set_value(REPORT_KEY, self.report.to_dict())

        error_summary = self.error_handler.get_error_summary()
        if error_summary['total_errors']:
            logger.info(f"Error summary: {error_summary}")

        if self.progress_reporter:
            self.progress_reporter.print_final_summary()
            if self.log_manager:
                self.log_manager.export_metrics_json(self.progress_reporter.get_final_report(),
                                                     "final_crawl_metrics.json")

        return self.report

    async def _worker(self):
        while True:
            url = self.request_queue.fetch_next_request()
            if url is None:
                return
            await self.process_request(url)

    async def process_request(self, url: str) -> CrawlResult:
        """Run one URL to a terminal outcome

        Exactly one dataset item is written: the extracted record, or an
        error record once retries are exhausted.
        """
        request_start = time.time()
        logger.info(f"Processing: {url}")

        try:
            record = await self.error_handler.execute_with_retry(self._load_page, url, url)
            return await self._request_handler(url, record, request_start)
        except Exception as error:
            return await self._failed_request_handler(url, error, request_start)

    async def _load_page(self, url: str) -> ExtractedRecord:
        return await asyncio.wait_for(self.fetcher.fetch(url), timeout=self.request_handler_timeout)

    async def _request_handler(self, url: str, record: ExtractedRecord, request_start: float) -> CrawlResult:
        for feature in self.features:
            await feature.process_record(record, self)

        processing_time = _elapsed_ms(request_start)
        record.metadata = RecordMetadata(
            scraped_at=utc_timestamp(),
            source_url=url,
            processing_time=processing_time
        )

        result = CrawlResult(url=url, record=record, processing_time=processing_time)
        await self.dataset.push_data(result.to_dict())

        response_time = _elapsed_ms(request_start)
        self.aggregator.record_success(url, response_time)
        if self.log_manager:
            quality = record.data_quality.overall if record.data_quality else None
            self.log_manager.log_request_event(url, REQUEST_SUCCEEDED, response_time, quality_score=quality)

        logger.info(f"Successfully extracted data from {url}")
        return result

    async def _failed_request_handler(self, url: str, error: Exception, request_start: float) -> CrawlResult:
        message = str(error) or type(error).__name__
        logger.error(f"Request completely failed: {url}: {message}")

        result = CrawlResult(url=url, error=ErrorRecord(url=url, error_message=message),
                             processing_time=_elapsed_ms(request_start))
        self.aggregator.record_failure(url, message)
        if self.log_manager:
            self.log_manager.log_request_event(url, REQUEST_FAILED, _elapsed_ms(request_start), error=message)

        try:
            await self.dataset.push_data(result.to_dict())
        except OSError as e:
            logger.error(f"Could not store error record for {url}: {e}")

        return result


def _elapsed_ms(start: float) -> int:
    return int((time.time() - start) * 1000)
