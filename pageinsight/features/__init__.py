"""
Crawler Features - Composable record enrichment steps
"""

from .base import CrawlerFeature
from .data_quality_feature import DataQualityFeature
from .analytics_feature import AnalyticsFeature

__all__ = [
    'CrawlerFeature',
    'DataQualityFeature',
    'AnalyticsFeature'
]
