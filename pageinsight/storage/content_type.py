from enum import Enum


class ContentType(Enum):
    """Enum for the value types the storages can hold"""
    JSON = 'json'
    TEXT = 'text'

    @property
    def extension(self) -> str:
        extensions = {
            ContentType.JSON: '.json',
            ContentType.TEXT: '.txt'
        }
        return extensions[self]
