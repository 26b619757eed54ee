"""
Result sinks: append-only dataset and named key-value slots
"""

from .dataset import Dataset
from .key_value_store import KeyValueStore
from .content_type import ContentType

__all__ = [
    'Dataset',
    'KeyValueStore',
    'ContentType'
]
