import math
import time
import psutil
import logging
import threading
from datetime import datetime
from dataclasses import asdict
from typing import Dict, Optional, Any, List
from collections import deque

from .run_metrics import RunMetrics
from .system_metrics import SystemMetrics
from ..models import RunReport

logger = logging.getLogger(__name__)


class RunAggregator:
    """Accumulates request outcomes across a run

    Every finished request is recorded exactly once, through either
    record_success or record_failure. Updates are commutative, so the order
    in which concurrent workers report does not matter.
    """

    def __init__(self):
        self.start_time = time.time()
        self.metrics = RunMetrics()
        self.system_metrics = SystemMetrics()

        # Last failures, for the final log
        self.recent_failures: deque = deque(maxlen=100)

        self._lock = threading.Lock()

    def record_success(self, url: str, response_time_ms: float):
        """Record a request that produced an ExtractedRecord"""
        with self._lock:
            self.metrics.requests_succeeded += 1
            count = self.metrics.requests_succeeded
            # Incremental mean over successful requests
            self.metrics.average_response_time = (
                (self.metrics.average_response_time * (count - 1)) + response_time_ms
            ) / count

    def record_failure(self, url: str, error_message: str):
        """Record a request that ended in an ErrorRecord"""
        with self._lock:
            self.metrics.requests_failed += 1
            self.recent_failures.append({
                'timestamp': datetime.now().isoformat(),
                'url': url,
                'error': error_message
            })

    @property
    def total_processed(self) -> int:
        return self.metrics.total_processed

    def failure_rate(self) -> float:
        with self._lock:
            return self.metrics.failure_rate

    def elapsed_ms(self) -> int:
        return int((time.time() - self.start_time) * 1000)

    def collect_system_metrics(self):
        """Collect current process and host resource usage"""
        try:
            self.system_metrics.cpu_percent = psutil.cpu_percent(interval=None)
            memory = psutil.virtual_memory()
            self.system_metrics.memory_used_mb = memory.used / (1024 * 1024)
            self.system_metrics.memory_percent = memory.percent

            try:
                process = psutil.Process()
                self.system_metrics.process_rss_mb = process.memory_info().rss / (1024 * 1024)
                self.system_metrics.open_files = process.num_fds() if hasattr(process, 'num_fds') else len(process.open_files())
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                self.system_metrics.open_files = 0

        except Exception as e:
            logger.warning(f"Failed to collect system metrics: {e}")

    def get_current_snapshot(self) -> Dict[str, Any]:
        """Get current metrics snapshot"""
        self.collect_system_metrics()
        with self._lock:
            return {
                'timestamp': datetime.now().isoformat(),
                'uptime_seconds': time.time() - self.start_time,
                'run_metrics': {
                    **asdict(self.metrics),
                    'total_processed': self.metrics.total_processed,
                    'failure_rate': self.metrics.failure_rate
                },
                'system_metrics': asdict(self.system_metrics)
            }

    def get_recent_failures(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self.recent_failures)

    def build_report(self, configuration: Optional[Dict[str, Any]] = None) -> RunReport:
        """Terminal snapshot of the run"""
        with self._lock:
            return RunReport(
                total_processed=self.metrics.total_processed,
                successful_extractions=self.metrics.requests_succeeded,
                failure_rate=self.metrics.failure_rate,
                average_response_time=math.floor(self.metrics.average_response_time + 0.5),
                total_duration=self.elapsed_ms(),
                configuration=dict(configuration or {})
            )
