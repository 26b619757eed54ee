"""
Page Fetcher Interface - Loads a URL and returns its extracted fields
"""

from abc import ABC, abstractmethod
from ..models import ExtractedRecord


class PageFetcher(ABC):
    """Base interface for page fetchers"""

    @abstractmethod
    async def start(self) -> None:
        """Acquire long-lived resources (browser, HTTP session)"""
        pass

    @abstractmethod
    async def fetch(self, url: str) -> ExtractedRecord:
        """Load one URL and extract its fields

        Raises:
            FetchError: navigation failed or the page never became ready
            ExtractionError: the loaded page could not be read
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release resources"""
        pass

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
