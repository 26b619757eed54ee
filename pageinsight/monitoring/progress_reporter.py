import time
import asyncio
from datetime import datetime
from typing import Dict, Any
from .run_aggregator import RunAggregator


class ProgressReporter:
    """Reports crawl progress and statistics"""

    def __init__(self, aggregator: RunAggregator, report_interval: float = 30.0):
        self.aggregator = aggregator
        self.report_interval = report_interval
        self.reporting_task = None

    async def start_reporting(self):
        """Start periodic progress reporting"""
        self.reporting_task = asyncio.create_task(self._reporting_loop())

    async def stop_reporting(self):
        """Stop progress reporting"""
        if self.reporting_task:
            self.reporting_task.cancel()
            try:
                await self.reporting_task
            except asyncio.CancelledError:
                pass
            self.reporting_task = None

    async def _reporting_loop(self):
        while True:
            await asyncio.sleep(self.report_interval)
            self.print_progress_report()

    def print_progress_report(self):
        """Print a progress block with run and system metrics"""
        snapshot = self.aggregator.get_current_snapshot()
        run_metrics = snapshot['run_metrics']
        system_metrics = snapshot['system_metrics']

        print(f"\n{'='*60}")
        print(f"📊 CRAWL PROGRESS REPORT - {datetime.now().strftime('%H:%M:%S')}")
        print(f"{'='*60}")

        print(f"🌐 Crawl Performance:")
        print(f"  Processed: {run_metrics['total_processed']}")
        print(f"  Succeeded: {run_metrics['requests_succeeded']}")
        print(f"  Failed: {run_metrics['requests_failed']}")
        print(f"  Failure rate: {run_metrics['failure_rate']:.1f}%")
        print(f"  Avg response time: {run_metrics['average_response_time']:.0f}ms")

        print(f"\n💻 System Resources:")
        print(f"  CPU: {system_metrics['cpu_percent']:.1f}%")
        print(f"  Memory: {system_metrics['memory_used_mb']:.0f} MB ({system_metrics['memory_percent']:.1f}%)")
        print(f"  Process RSS: {system_metrics['process_rss_mb']:.0f} MB")
        print(f"  Open files: {system_metrics['open_files']}")

    def print_final_summary(self):
        metrics = self.aggregator.metrics
        print(f"🎉 Scraping completed!")
        print(f"📊 Processed: {metrics.total_processed} items")
        print(f"✅ Successful: {metrics.requests_succeeded} items")
        print(f"⚡ Avg. response time: {round(metrics.average_response_time)}ms")

    def get_final_report(self) -> Dict[str, Any]:
        """Snapshot plus throughput, for the metrics export"""
        snapshot = self.aggregator.get_current_snapshot()
        elapsed_time = time.time() - self.aggregator.start_time
        processed = snapshot['run_metrics']['total_processed']

        return {
            'final_snapshot': snapshot,
            'performance_summary': {
                'total_runtime_minutes': elapsed_time / 60,
                'pages_per_minute': (processed / elapsed_time) * 60 if elapsed_time > 0 else 0
            },
            'recent_failures': self.aggregator.get_recent_failures()
        }
