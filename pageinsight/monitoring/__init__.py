"""
Monitoring and observability modules
"""

from .run_aggregator import RunAggregator
from .progress_reporter import ProgressReporter
from .log_manager import LogManager
from .run_metrics import RunMetrics
from .system_metrics import SystemMetrics

__all__ = [
    'RunAggregator',
    'ProgressReporter',
    'LogManager',
    'RunMetrics',
    'SystemMetrics'
]
