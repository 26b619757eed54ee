"""
Error Handler - Classifies per-page failures and retries them with exponential backoff

Navigation timeouts, network errors, HTTP 429 and 5xx responses and
extraction failures are retried; other 4xx responses fail immediately.
"""

import asyncio
import random
import time
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Callable, Any
from collections import defaultdict

import aiohttp
from playwright.async_api import TimeoutError as PlaywrightTimeoutError, Error as PlaywrightError

from .errors import FetchError, ExtractionError

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Classification of per-page errors"""
    NAVIGATION_TIMEOUT = "navigation_timeout"
    CONNECTION_ERROR = "connection_error"
    NAVIGATION_ERROR = "navigation_error"
    HTTP_CLIENT_ERROR = "http_client_error"  # 4xx
    HTTP_SERVER_ERROR = "http_server_error"  # 5xx
    RATE_LIMITED = "rate_limited"  # 429
    EXTRACTION_ERROR = "extraction_error"
    UNKNOWN_ERROR = "unknown_error"


@dataclass
class RetryConfig:
    """Configuration for retry behavior

    max_retries counts retries after the first attempt.
    """
    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0
    jitter: bool = True
    retryable_errors: List[ErrorType] = None

    def __post_init__(self):
        if self.retryable_errors is None:
            self.retryable_errors = [
                ErrorType.NAVIGATION_TIMEOUT,
                ErrorType.CONNECTION_ERROR,
                ErrorType.NAVIGATION_ERROR,
                ErrorType.HTTP_SERVER_ERROR,
                ErrorType.RATE_LIMITED,
                ErrorType.EXTRACTION_ERROR,
                ErrorType.UNKNOWN_ERROR
            ]

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


@dataclass
class ErrorInfo:
    """Information about an error occurrence"""
    url: str
    error_type: ErrorType
    status_code: Optional[int]
    message: str
    timestamp: float
    attempt: int
    response_time: Optional[float] = None


class ErrorHandler:
    """Per-request retries with exponential backoff and an error history"""

    def __init__(self, retry_config: RetryConfig = None):
        self.retry_config = retry_config or RetryConfig()
        self.error_history: List[ErrorInfo] = []
        self.failed_urls: Dict[str, List[ErrorInfo]] = defaultdict(list)

    def classify_error(self, error: Exception, status_code: Optional[int] = None) -> ErrorType:
        """Classify an error into appropriate error type"""
        if isinstance(error, (asyncio.TimeoutError, PlaywrightTimeoutError)):
            return ErrorType.NAVIGATION_TIMEOUT
        elif isinstance(error, ExtractionError):
            return ErrorType.EXTRACTION_ERROR
        elif isinstance(error, aiohttp.ClientConnectionError):
            return ErrorType.CONNECTION_ERROR
        elif status_code:
            if status_code == 429:
                return ErrorType.RATE_LIMITED
            elif 400 <= status_code < 500:
                return ErrorType.HTTP_CLIENT_ERROR
            elif 500 <= status_code < 600:
                return ErrorType.HTTP_SERVER_ERROR
        elif isinstance(error, (FetchError, PlaywrightError, aiohttp.ClientError)):
            return ErrorType.NAVIGATION_ERROR

        return ErrorType.UNKNOWN_ERROR

    def is_retryable(self, error_type: ErrorType, attempt: int) -> bool:
        """Determine if an error should be retried"""
        if attempt >= self.retry_config.max_attempts:
            return False

        return error_type in self.retry_config.retryable_errors

    def calculate_delay(self, attempt: int, error_type: ErrorType) -> float:
        """Calculate delay before retry using exponential backoff with jitter"""
        delay = self.retry_config.base_delay * (
            self.retry_config.exponential_base ** (attempt - 1)
        )

        if error_type == ErrorType.RATE_LIMITED:
            delay *= 2

        delay = min(delay, self.retry_config.max_delay)

        if self.retry_config.jitter:
            delay += delay * 0.1 * random.random()

        return delay

    async def execute_with_retry(self, func: Callable, url: str, *args, **kwargs) -> Any:
        """Await ``func(*args, **kwargs)``, retrying retryable errors

        Raises:
            The last error once it is not retryable or attempts are exhausted
        """
        for attempt in range(1, self.retry_config.max_attempts + 1):
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)

                if url in self.failed_urls:
                    del self.failed_urls[url]

                return result

            except Exception as error:
                status_code = getattr(error, 'status', None)
                error_type = self.classify_error(error, status_code)

                error_info = ErrorInfo(
                    url=url,
                    error_type=error_type,
                    status_code=status_code,
                    message=str(error),
                    timestamp=time.time(),
                    attempt=attempt,
                    response_time=time.time() - start_time
                )
                self.error_history.append(error_info)
                self.failed_urls[url].append(error_info)

                if not self.is_retryable(error_type, attempt):
                    logger.error(
                        f"Attempt {attempt}/{self.retry_config.max_attempts} failed for {url}: "
                        f"{error_type.value} - {error}"
                    )
                    raise

                logger.warning(
                    f"Attempt {attempt}/{self.retry_config.max_attempts} failed for {url}: "
                    f"{error_type.value} - {error}"
                )
                delay = self.calculate_delay(attempt, error_type)
                logger.info(f"Retrying {url} in {delay:.1f}s (attempt {attempt + 1})")
                await asyncio.sleep(delay)

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors encountered"""
        if not self.error_history:
            return {"total_errors": 0}

        error_counts = defaultdict(int)
        for error in self.error_history:
            error_counts[error.error_type.value] += 1

        return {
            "total_errors": len(self.error_history),
            "failed_urls": len(self.failed_urls),
            "error_types": dict(error_counts)
        }

    def get_failed_urls(self) -> List[str]:
        """URLs whose last attempt failed"""
        return list(self.failed_urls.keys())
