"""Tests for the analytics block."""

import math

from pageinsight.extraction import compute_analytics
from tests.helpers import make_record


class TestComputeAnalytics:

    def test_basic_metrics(self):
        record = make_record(content="one two three", links=4, images=2,
                             headings=["a", "b", "c"], meta_description="desc")
        analytics = compute_analytics(record)

        assert analytics.content_length == 13
        assert analytics.reading_time == 1
        assert analytics.has_meta_description is True
        assert analytics.heading_structure == 3
        assert analytics.media_richness == 0.5

    def test_reading_time_rounds_up(self):
        content = " ".join(["word"] * 201)
        analytics = compute_analytics(make_record(content=content))

        assert analytics.reading_time == 2

    def test_reading_time_splits_on_single_spaces_only(self):
        # Newlines and tabs do not separate words
        content = "\n".join(["word"] * 500)
        analytics = compute_analytics(make_record(content=content))

        assert analytics.reading_time == 1

    def test_consecutive_spaces_count_as_extra_words(self):
        content = "  ".join(["word"] * 150)
        analytics = compute_analytics(make_record(content=content))

        assert analytics.reading_time == 2

    def test_media_richness_without_links(self):
        analytics = compute_analytics(make_record(links=0, images=7))

        assert analytics.media_richness == 7.0
        assert math.isfinite(analytics.media_richness)

    def test_missing_meta_description(self):
        analytics = compute_analytics(make_record(meta_description=""))

        assert analytics.has_meta_description is False

    def test_to_dict(self):
        data = compute_analytics(make_record(content="a b", links=0, images=0, headings=[],
                                             meta_description="")).to_dict()

        assert data == {
            "contentLength": 3,
            "readingTime": 1,
            "hasMetaDescription": False,
            "headingStructure": 0,
            "mediaRichness": 0.0
        }
