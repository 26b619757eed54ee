"""
PageInsight Crawler
Extracts page fields, data quality scores and content analytics from a list of URLs
"""

from .models import SCRAPER_VERSION

__version__ = SCRAPER_VERSION
