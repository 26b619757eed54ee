"""
Analytics Feature - Attaches derived content metrics to each record
"""

from .base import CrawlerFeature
from ..extraction import compute_analytics
from ..models import ExtractedRecord


class AnalyticsFeature(CrawlerFeature):
    """Feature for reading time, heading and media metrics"""

    async def process_record(self, record: ExtractedRecord, crawler):
        record.analytics = compute_analytics(record)
