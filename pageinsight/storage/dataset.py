import csv
import json
import asyncio
import logging
import aiofiles
from pathlib import Path
from typing import Dict, List, Any, Iterable, Union

from .content_type import ContentType

logger = logging.getLogger(__name__)


class Dataset:
    """Append-only record store, one JSON file per record

    Layout: ``<base_path>/datasets/<name>/000000001.json``, numbered in push
    order. Records are never rewritten or deleted.
    """

    def __init__(self, base_path: Union[str, Path] = 'storage', name: str = 'default'):
        self.base_path = Path(base_path)
        self.name = name
        self.path = self.base_path / 'datasets' / name
        self._lock = asyncio.Lock()
        self._count = 0
        self.setup_directories()

    def setup_directories(self):
        """Create the dataset directory and continue numbering after the highest existing item"""
        self.path.mkdir(parents=True, exist_ok=True)
        indexes = [int(p.stem) for p in self._item_files() if p.stem.isdigit()]
        self._count = max(indexes, default=0)

    def _item_files(self) -> List[Path]:
        return sorted(self.path.glob(f'*{ContentType.JSON.extension}'))

    def _item_path(self, index: int) -> Path:
        return self.path / f'{index:09d}{ContentType.JSON.extension}'

    @property
    def item_count(self) -> int:
        return self._count

    async def push_data(self, items: Union[Dict[str, Any], Iterable[Dict[str, Any]]]) -> List[str]:
        """Append one record or a list of records

        Returns:
            Paths of the written files
        """
        if isinstance(items, dict):
            items = [items]

        written = []
        for item in items:
            # Serialise before taking a slot so a bad record never leaves a gap
            payload = json.dumps(item, indent=2, ensure_ascii=False, default=str)
            async with self._lock:
                self._count += 1
                item_path = self._item_path(self._count)

            async with aiofiles.open(item_path, 'w', encoding='utf-8') as f:
                await f.write(payload)
            written.append(str(item_path))

        logger.debug(f"Pushed {len(written)} item(s) to dataset '{self.name}'")
        return written

    def get_items(self) -> List[Dict[str, Any]]:
        """Read all records back in push order"""
        items = []
        for item_file in self._item_files():
            with open(item_file, 'r', encoding='utf-8') as f:
                items.append(json.load(f))
        return items

    def export(self, destination: Union[str, Path], fmt: str = 'json') -> Path:
        """Export all records to a single JSON or CSV file

        CSV rows flatten nested objects into dotted column names.
        """
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        items = self.get_items()

        if fmt == 'json':
            with open(destination, 'w', encoding='utf-8') as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
        elif fmt == 'csv':
            rows = [_flatten(item) for item in items]
            columns = []
            for row in rows:
                columns.extend(key for key in row if key not in columns)
            with open(destination, 'w', encoding='utf-8', newline='') as f:
                writer = csv.DictWriter(f, fieldnames=columns)
                writer.writeheader()
                writer.writerows(rows)
        else:
            raise ValueError(f"Unsupported export format: {fmt}")

        logger.info(f"Exported {len(items)} items to {destination}")
        return destination


def _flatten(data: Dict[str, Any], prefix: str = '') -> Dict[str, Any]:
    flat = {}
    for key, value in data.items():
        column = f'{prefix}{key}'
        if isinstance(value, dict):
            flat.update(_flatten(value, f'{column}.'))
        elif isinstance(value, list):
            flat[column] = json.dumps(value, ensure_ascii=False)
        else:
            flat[column] = value
    return flat
