"""
Data Quality Feature - Attaches a completeness score to each record
"""

import logging
from .base import CrawlerFeature
from ..extraction import validate_data_quality, LOW_QUALITY_THRESHOLD
from ..models import ExtractedRecord

logger = logging.getLogger(__name__)


class DataQualityFeature(CrawlerFeature):
    """Feature for scoring record completeness"""

    def __init__(self, warn_threshold: float = LOW_QUALITY_THRESHOLD):
        self.warn_threshold = warn_threshold
        self.low_quality_count = 0

    async def process_record(self, record: ExtractedRecord, crawler):
        score = validate_data_quality(record.base_fields())
        record.data_quality = score

        if score.overall < self.warn_threshold:
            self.low_quality_count += 1
            logger.warning(f"Low data quality detected: {score.overall} ({record.url}, "
                           f"missing: {', '.join(score.missing_fields)})")

    async def finalize(self, crawler):
        if self.low_quality_count:
            logger.info(f"{self.low_quality_count} record(s) scored below {self.warn_threshold}")
