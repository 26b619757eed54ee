"""Tests for the request queue."""

import pytest

from pageinsight.crawler import RequestQueue, unique_key


@pytest.mark.parametrize("first,second", [
    ("https://Example.com/page", "https://example.com/page"),
    ("https://example.com/page/", "https://example.com/page"),
    ("https://example.com/page#section", "https://example.com/page"),
    ("https://example.com/?b=2&a=1", "https://example.com/?a=1&b=2"),
    ("https://example.com/?utm_source=x&id=3", "https://example.com/?id=3"),
])
def test_equivalent_urls_share_a_key(first, second):
    assert unique_key(first) == unique_key(second)


def test_path_case_is_kept():
    assert unique_key("https://example.com/Page") != unique_key("https://example.com/page")


class TestRequestQueue:

    def test_fifo_order(self):
        queue = RequestQueue()
        queue.add_requests(["https://a.example", "https://b.example"])

        assert queue.fetch_next_request() == "https://a.example"
        assert queue.fetch_next_request() == "https://b.example"
        assert queue.fetch_next_request() is None

    def test_duplicates_are_dropped(self):
        queue = RequestQueue()
        added = queue.add_requests(["https://example.com", "https://example.com/", "https://EXAMPLE.com"])

        assert added == 1
        assert queue.duplicates_skipped == 2
        assert len(queue) == 1

    def test_item_ceiling(self):
        queue = RequestQueue(max_items=2)
        queue.add_requests([f"https://example.com/{i}" for i in range(5)])

        handed_out = [queue.fetch_next_request() for _ in range(5)]

        assert handed_out[:2] == ["https://example.com/0", "https://example.com/1"]
        assert handed_out[2:] == [None, None, None]
        assert queue.pending_count == 3
        assert queue.is_finished()
