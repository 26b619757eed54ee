from dataclasses import dataclass


@dataclass
class RunMetrics:
    """Outcome counters for one crawl run"""
    requests_succeeded: int = 0
    requests_failed: int = 0
    average_response_time: float = 0.0  # ms, successful requests only

    @property
    def total_processed(self) -> int:
        return self.requests_succeeded + self.requests_failed

    @property
    def failure_rate(self) -> float:
        """Failed share of finished requests, in percent"""
        return self.requests_failed / max(self.total_processed, 1) * 100
