"""
Quality Scorer - Completeness ratio over a record snapshot
"""

from typing import Any, Mapping

from ..models import QualityScore

LOW_QUALITY_THRESHOLD = 0.7

# Values counted as missing. 0 and False are legitimate extracted values
# (e.g. a page with no links) but are still reported missing so scores stay
# comparable with earlier runs. Empty lists count as filled.
_EMPTY_VALUES = (None, False, 0, '')


def is_filled(value: Any) -> bool:
    if isinstance(value, (list, tuple, dict)):
        return True
    return value not in _EMPTY_VALUES


def validate_data_quality(snapshot: Mapping[str, Any]) -> QualityScore:
    """Score a record snapshot

    Args:
        snapshot: Field name to value, taken before any enrichment is attached

    Returns:
        QualityScore whose completeness plus missing field count equals the
        number of fields in the snapshot
    """
    fields = list(snapshot.keys())
    filled = [key for key in fields if is_filled(snapshot[key])]
    missing = [key for key in fields if not is_filled(snapshot[key])]

    return QualityScore(
        overall=len(filled) / len(fields) if fields else 0.0,
        completeness=len(filled),
        total_fields=len(fields),
        missing_fields=missing
    )
