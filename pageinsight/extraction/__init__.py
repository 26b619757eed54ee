"""
Extraction, quality scoring and analytics for a single page
"""

from .field_extractor import extract_fields, extract_fields_from_html, MAX_CONTENT_LENGTH
from .quality import validate_data_quality, LOW_QUALITY_THRESHOLD
from .analytics import compute_analytics

__all__ = [
    'extract_fields',
    'extract_fields_from_html',
    'MAX_CONTENT_LENGTH',
    'validate_data_quality',
    'LOW_QUALITY_THRESHOLD',
    'compute_analytics'
]
