"""
Crawl Result - Terminal outcome of one request
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from ..models import ExtractedRecord, ErrorRecord


@dataclass
class CrawlResult:
    """Result of crawling a single URL; exactly one of record/error is set"""
    url: str
    record: Optional[ExtractedRecord] = None
    error: Optional[ErrorRecord] = None
    processing_time: int = 0  # ms

    @property
    def succeeded(self) -> bool:
        return self.record is not None

    def to_dict(self) -> Dict[str, Any]:
        """Item as written to the dataset"""
        return self.record.to_dict() if self.record is not None else self.error.to_dict()
