"""
Request Queue - FIFO of URLs with unique-key deduplication and an item ceiling
"""

import logging
from collections import deque
from typing import Iterable, Optional, Set
from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

logger = logging.getLogger(__name__)


def unique_key(url: str) -> str:
    """Normalise a URL into the key used to detect duplicate requests

    Lowercases scheme and host, drops the fragment, the trailing slash and
    ``utm_*`` parameters, and sorts the remaining query parameters. Path and
    parameter values keep their case.
    """
    stripped = url.strip()
    try:
        parsed = urlparse(stripped)
    except ValueError as e:
        logger.warning(f"Failed to normalise URL {url}: {e}")
        return stripped

    if not parsed.scheme or not parsed.netloc:
        return stripped

    path = parsed.path.rstrip('/')

    params = [
        (key, value) for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if not key.lower().startswith('utm_')
    ]
    query = urlencode(sorted(params))

    return urlunparse((
        parsed.scheme.lower(),
        parsed.netloc.lower(),
        path,
        parsed.params,
        query,
        ''
    ))


class RequestQueue:
    """Queue of pending URLs

    At most ``max_items`` URLs are ever handed out; the rest stay queued and
    are reported as skipped.
    """

    def __init__(self, max_items: int = 1000):
        self.max_items = max_items
        self._pending = deque()
        self._seen_keys: Set[str] = set()
        self.handed_out = 0
        self.duplicates_skipped = 0

    def add_request(self, url: str) -> bool:
        """Queue a URL unless an equivalent one was already added

        Returns:
            True if the URL was queued
        """
        key = unique_key(url)
        if key in self._seen_keys:
            self.duplicates_skipped += 1
            logger.info(f"Skipping duplicate URL: {url}")
            return False

        self._seen_keys.add(key)
        self._pending.append(url)
        return True

    def add_requests(self, urls: Iterable[str]) -> int:
        """Queue several URLs, returning how many were new"""
        return sum(1 for url in urls if self.add_request(url))

    def fetch_next_request(self) -> Optional[str]:
        """Next URL to process, or None when empty or the ceiling is reached"""
        if not self._pending or self.handed_out >= self.max_items:
            return None

        self.handed_out += 1
        return self._pending.popleft()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def is_finished(self) -> bool:
        return not self._pending or self.handed_out >= self.max_items

    def __len__(self) -> int:
        return len(self._pending)
