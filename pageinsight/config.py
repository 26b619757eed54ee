"""
Input Configuration - Run options read at startup
"""

import json
import os
import logging
import itertools
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional, Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = 'storage'
INPUT_KEY = 'INPUT'


@dataclass
class ProxyConfiguration:
    """Proxy settings handed to the fetchers

    The raw mapping is kept as given. When it lists ``proxyUrls`` they are
    handed out round-robin, one per browser context or HTTP request.
    """
    raw: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self._cycle = itertools.cycle(self.proxy_urls) if self.proxy_urls else None

    @property
    def proxy_urls(self) -> List[str]:
        return list(self.raw.get('proxyUrls') or [])

    def new_url(self) -> Optional[str]:
        """Next proxy URL, or None when no proxy is configured"""
        if self._cycle is None:
            return None
        return next(self._cycle)


@dataclass
class CrawlerInput:
    """Options of a single crawl run"""
    start_urls: List[str] = field(default_factory=list)
    max_concurrency: int = 5
    max_items: int = 1000
    output_format: str = 'comprehensive'
    enable_analytics: bool = True
    data_quality_check: bool = True
    proxy_configuration: Optional[Dict[str, Any]] = None
    use_browser: bool = True
    headless: bool = True
    max_request_retries: int = 3
    request_handler_timeout_secs: float = 120.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'CrawlerInput':
        """Build from the camelCase input object

        Raises:
            ConfigurationError: if a value has the wrong type
        """
        data = data or {}
        defaults = cls()
        return cls(
            start_urls=_normalize_start_urls(data.get('startUrls')),
            max_concurrency=_as_number(data, 'maxConcurrency', defaults.max_concurrency, int),
            max_items=_as_number(data, 'maxItems', defaults.max_items, int),
            output_format=data.get('outputFormat', defaults.output_format),
            enable_analytics=_as_bool(data, 'enableAnalytics', defaults.enable_analytics),
            data_quality_check=_as_bool(data, 'dataQualityCheck', defaults.data_quality_check),
            proxy_configuration=data.get('proxyConfiguration'),
            use_browser=_as_bool(data, 'useBrowser', defaults.use_browser),
            headless=_as_bool(data, 'headless', defaults.headless),
            max_request_retries=_as_number(data, 'maxRequestRetries', defaults.max_request_retries, int),
            request_handler_timeout_secs=_as_number(
                data, 'requestHandlerTimeoutSecs', defaults.request_handler_timeout_secs, float
            )
        )

    def validate(self) -> 'CrawlerInput':
        """Raise ConfigurationError when the run cannot start"""
        if not self.start_urls:
            raise ConfigurationError(
                'startUrls is required. Please provide at least one URL to scrape.'
            )
        if self.max_concurrency < 1:
            raise ConfigurationError(f'maxConcurrency must be at least 1, got {self.max_concurrency}')
        if self.max_items < 1:
            raise ConfigurationError(f'maxItems must be at least 1, got {self.max_items}')
        if self.max_request_retries < 0:
            raise ConfigurationError(f'maxRequestRetries cannot be negative, got {self.max_request_retries}')
        return self

    def proxy(self) -> ProxyConfiguration:
        return ProxyConfiguration(raw=dict(self.proxy_configuration or {}))

    def snapshot(self) -> Dict[str, Any]:
        """Configuration section of the run report"""
        return {
            'maxItems': self.max_items,
            'outputFormat': self.output_format,
            'enableAnalytics': self.enable_analytics,
            'dataQualityCheck': self.data_quality_check
        }


def _as_number(data: Dict[str, Any], key: str, default, convert):
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigurationError(f'{key} must be a number, got {value!r}')
    try:
        return convert(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f'{key} must be a number, got {value!r}') from e


def _as_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f'{key} must be true or false, got {value!r}')
    return value


def _normalize_start_urls(entries: Optional[List[Union[str, Dict[str, Any]]]]) -> List[str]:
    """Accept a list of plain strings or ``{"url": ...}`` objects"""
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ConfigurationError(f'startUrls must be a list of URLs, got {type(entries).__name__}')

    urls = []
    for entry in entries:
        url = entry.get('url') if isinstance(entry, dict) else entry
        if not url or not isinstance(url, str):
            logger.warning(f"Ignoring invalid start URL entry: {entry!r}")
            continue
        urls.append(url.strip())
    return urls


def resolve_storage_dir(storage_dir: Optional[str] = None) -> Path:
    """Storage root from the argument, the environment, or the default"""
    return Path(storage_dir or os.environ.get('PAGEINSIGHT_STORAGE_DIR') or DEFAULT_STORAGE_DIR)


def load_input(input_path: Optional[str] = None, storage_dir: Optional[Path] = None) -> CrawlerInput:
    """Read the input JSON

    Lookup order: explicit path, ``$PAGEINSIGHT_INPUT``, then
    ``<storage>/key_value_stores/default/INPUT.json``. A missing file gives
    an empty input, which fails validation.
    """
    path = input_path or os.environ.get('PAGEINSIGHT_INPUT')
    if path:
        input_file = Path(path)
    else:
        input_file = resolve_storage_dir(storage_dir) / 'key_value_stores' / 'default' / f'{INPUT_KEY}.json'

    if not input_file.exists():
        logger.warning(f"No input found at {input_file}")
        return CrawlerInput.from_dict({})

    try:
        with open(input_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Input file {input_file} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Input file {input_file} must contain a JSON object")

    return CrawlerInput.from_dict(data)
