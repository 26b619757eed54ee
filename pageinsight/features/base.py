"""
Base Feature Interface - Abstract base class for record enrichment features
"""

from abc import ABC, abstractmethod
from ..models import ExtractedRecord


class CrawlerFeature(ABC):
    """Base interface for all crawler features

    Features run in the order they were added to the crawler, once per
    successfully extracted record, before the record is pushed.
    """

    async def initialize(self, crawler) -> None:
        """Initialize the feature when crawler starts"""
        pass

    @abstractmethod
    async def process_record(self, record: ExtractedRecord, crawler) -> None:
        """Enrich a freshly extracted record in place"""
        pass

    async def finalize(self, crawler) -> None:
        """Clean up when crawling completes"""
        pass
