"""
Exceptions raised by the crawler
"""

from typing import Optional


class PageInsightError(Exception):
    """Base class for crawler errors"""


class ConfigurationError(PageInsightError):
    """Input configuration is unusable; the run must not start"""


class FetchError(PageInsightError):
    """Page could not be loaded (navigation failure, readiness timeout, bad status)"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ExtractionError(PageInsightError):
    """Reading fields from an already loaded page failed"""
