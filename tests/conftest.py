"""
Shared fixtures
"""

import pytest

from pageinsight.crawler import CrawlerBuilder
from tests.helpers import FakeFetcher


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def builder_factory(tmp_path):
    """Builder wired to a temp storage dir, no delays and no progress output"""
    def factory(start_urls, fetcher=None):
        return (CrawlerBuilder(start_urls)
                .with_fetcher(fetcher or FakeFetcher())
                .storage_dir(tmp_path)
                .retry_delay(0, jitter=False)
                .progress_reports(None))
    return factory
