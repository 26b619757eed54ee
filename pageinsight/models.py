"""
Record Models - Data structures written to the dataset and key-value store
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, List, Any

SCRAPER_NAME = 'Video Content Analytics & Engagement Intelligence'
SCRAPER_VERSION = '2.0.0'
SCRAPER_CATEGORY = 'video-analytics'


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string with millisecond precision"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass
class QualityScore:
    """Completeness ratio over a record's base fields"""
    overall: float
    completeness: int
    total_fields: int
    missing_fields: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'overall': self.overall,
            'completeness': self.completeness,
            'totalFields': self.total_fields,
            'missingFields': list(self.missing_fields)
        }


@dataclass
class AnalyticsBlock:
    """Secondary metrics derived from the extracted fields"""
    content_length: int
    reading_time: int
    has_meta_description: bool
    heading_structure: int
    media_richness: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'contentLength': self.content_length,
            'readingTime': self.reading_time,
            'hasMetaDescription': self.has_meta_description,
            'headingStructure': self.heading_structure,
            'mediaRichness': self.media_richness
        }


@dataclass
class RecordMetadata:
    scraped_at: str
    source_url: str
    processing_time: int
    scraper_version: str = SCRAPER_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            'scrapedAt': self.scraped_at,
            'sourceUrl': self.source_url,
            'processingTime': self.processing_time,
            'scraperVersion': self.scraper_version
        }


@dataclass
class ExtractedRecord:
    """Fields read from one loaded page, plus optional enrichment"""
    url: str
    title: str = ''
    content: str = ''
    links: int = 0
    images: int = 0
    headings: List[str] = field(default_factory=list)
    meta_description: str = ''
    timestamp: str = field(default_factory=utc_timestamp)
    data_quality: Optional[QualityScore] = None
    analytics: Optional[AnalyticsBlock] = None
    metadata: Optional[RecordMetadata] = None

    def base_fields(self) -> Dict[str, Any]:
        """Snapshot of the extracted fields, without any enrichment

        Quality scoring runs over this snapshot, so enrichment attached
        later never changes the field count.
        """
        return {
            'url': self.url,
            'title': self.title,
            'content': self.content,
            'links': self.links,
            'images': self.images,
            'headings': list(self.headings),
            'metaDescription': self.meta_description,
            'timestamp': self.timestamp
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.base_fields()
        if self.data_quality is not None:
            data['dataQuality'] = self.data_quality.to_dict()
        if self.analytics is not None:
            data['analytics'] = self.analytics.to_dict()
        if self.metadata is not None:
            data['metadata'] = self.metadata.to_dict()
        return data

    @classmethod
    def from_page_data(cls, data: Dict[str, Any]) -> 'ExtractedRecord':
        """Build a record from the dict returned by the in-page script"""
        return cls(
            url=data.get('url') or '',
            title=data.get('title') or '',
            content=data.get('content') or '',
            links=int(data.get('links') or 0),
            images=int(data.get('images') or 0),
            headings=list(data.get('headings') or []),
            meta_description=data.get('metaDescription') or '',
            timestamp=data.get('timestamp') or utc_timestamp()
        )


@dataclass
class ErrorRecord:
    """Written instead of an ExtractedRecord when a URL ultimately fails"""
    url: str
    error_message: str
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error': True,
            'url': self.url,
            'errorMessage': self.error_message,
            'timestamp': self.timestamp
        }


@dataclass
class RunReport:
    """End-of-run summary persisted under PERFORMANCE_REPORT"""
    total_processed: int
    successful_extractions: int
    failure_rate: float
    average_response_time: int
    total_duration: int
    configuration: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': {
                'totalProcessed': self.total_processed,
                'successfulExtractions': self.successful_extractions,
                'failureRate': self.failure_rate,
                'averageResponseTime': self.average_response_time,
                'totalDuration': self.total_duration
            },
            'configuration': dict(self.configuration),
            'scraperInfo': {
                'name': SCRAPER_NAME,
                'version': SCRAPER_VERSION,
                'category': SCRAPER_CATEGORY
            }
        }
