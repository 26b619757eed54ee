import json
import logging
import aiofiles
from pathlib import Path
from typing import Any, Optional, Union

from .content_type import ContentType

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Named slots persisted as files under ``<base_path>/key_value_stores/<name>/``"""

    def __init__(self, base_path: Union[str, Path] = 'storage', name: str = 'default'):
        self.base_path = Path(base_path)
        self.name = name
        self.path = self.base_path / 'key_value_stores' / name
        self.path.mkdir(parents=True, exist_ok=True)

    def get_file_path(self, key: str, content_type: ContentType = ContentType.JSON) -> Path:
        """File backing a key

        Keys may only contain characters that are safe in a file name.
        """
        if not key or any(sep in key for sep in ('/', '\\')) or key in ('.', '..'):
            raise ValueError(f"Invalid key-value store key: {key!r}")
        return self.path / f"{key}{content_type.extension}"

    async def set_value(self, key: str, value: Any, content_type: ContentType = ContentType.JSON) -> str:
        """Store a value, replacing any previous one under the same key

        Returns:
            File path as string
        """
        file_path = self.get_file_path(key, content_type)

        if content_type == ContentType.JSON:
            payload = json.dumps(value, indent=2, ensure_ascii=False, default=str)
        else:
            payload = str(value)

        async with aiofiles.open(file_path, 'w', encoding='utf-8') as f:
            await f.write(payload)

        logger.debug(f"Stored '{key}' in key-value store '{self.name}'")
        return str(file_path)

    async def get_value(self, key: str, default: Optional[Any] = None) -> Any:
        """Read a value back; JSON slots are decoded, text slots returned as str"""
        for content_type in ContentType:
            file_path = self.get_file_path(key, content_type)
            if not file_path.exists():
                continue

            async with aiofiles.open(file_path, 'r', encoding='utf-8') as f:
                payload = await f.read()
            return json.loads(payload) if content_type == ContentType.JSON else payload

        return default
