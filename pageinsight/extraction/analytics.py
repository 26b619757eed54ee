"""
Analytics Enhancer - Secondary metrics derived from extracted fields
"""

import math

from ..models import AnalyticsBlock, ExtractedRecord

WORDS_PER_MINUTE = 200


def compute_analytics(record: ExtractedRecord) -> AnalyticsBlock:
    """Derive reading time, heading count and media richness from a record"""
    # Single-space split; runs of whitespace other than ' ' are not separators
    word_count = len(record.content.split(' '))

    return AnalyticsBlock(
        content_length=len(record.content),
        reading_time=math.ceil(word_count / WORDS_PER_MINUTE),
        has_meta_description=bool(record.meta_description),
        heading_structure=len(record.headings),
        media_richness=record.images / max(record.links, 1)
    )
