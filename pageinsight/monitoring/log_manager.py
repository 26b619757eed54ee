"""
Log Manager - Console and file logging plus a JSON-lines log of request outcomes
"""

import json
import logging
from pathlib import Path
from datetime import datetime
from urllib.parse import urlparse
from typing import Dict, Any, Optional

REQUEST_SUCCEEDED = 'request_succeeded'
REQUEST_FAILED = 'request_failed'


class LogManager:
    """Logging setup for a crawl run

    Besides the console, a run with file logging writes ``crawler_<day>.log``
    (everything), ``errors_<day>.log`` (warnings and up) and
    ``requests_<day>.jsonl``, one JSON object per finished URL.
    """

    def __init__(self, log_dir: str = "storage/logs", log_level: str = "INFO",
                 file_logging: bool = True):
        self.log_dir = Path(log_dir)
        self.file_logging = file_logging
        if self.file_logging:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.setup_logging(log_level)

    @property
    def request_log_path(self) -> Path:
        return self.log_dir / f"requests_{datetime.now().strftime('%Y%m%d')}.jsonl"

    def setup_logging(self, log_level: str):
        """Attach console and file handlers to the root logger"""
        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        console_formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level.upper()))
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

        self.request_logger = logging.getLogger('pageinsight.requests')
        self.request_logger.setLevel(logging.INFO)
        self.request_logger.handlers.clear()
        self.request_logger.propagate = False

        if not self.file_logging:
            return

        today = datetime.now().strftime('%Y%m%d')

        run_handler = logging.FileHandler(self.log_dir / f"crawler_{today}.log", encoding='utf-8')
        run_handler.setLevel(logging.DEBUG)
        run_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(run_handler)

        warning_handler = logging.FileHandler(self.log_dir / f"errors_{today}.log", encoding='utf-8')
        warning_handler.setLevel(logging.WARNING)
        warning_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(warning_handler)

        self.request_logger.addHandler(logging.FileHandler(self.request_log_path, encoding='utf-8'))

    def log_request_event(self, url: str, outcome: str, response_time_ms: int,
                          error: Optional[str] = None, quality_score: Optional[float] = None) -> Dict[str, Any]:
        """Write the terminal outcome of one URL

        Returns:
            The event as written
        """
        event = {
            'timestamp': datetime.now().isoformat(),
            'event_type': outcome,
            'url': url,
            'domain': urlparse(url).netloc.lower(),
            'response_time_ms': response_time_ms
        }
        if quality_score is not None:
            event['quality_score'] = quality_score
        if error is not None:
            event['error'] = error

        self.request_logger.info(json.dumps(event, ensure_ascii=False, default=str))
        return event

    def close(self):
        """Flush and detach the file handlers this manager opened"""
        for target in (logging.getLogger(), self.request_logger):
            for handler in list(target.handlers):
                if isinstance(handler, logging.FileHandler):
                    handler.close()
                    target.removeHandler(handler)

    def export_metrics_json(self, metrics_data: Dict[str, Any], filename: Optional[str] = None) -> Path:
        """Export metrics to JSON file"""
        if filename is None:
            filename = f"metrics_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

        self.log_dir.mkdir(parents=True, exist_ok=True)
        export_path = self.log_dir / filename
        with open(export_path, 'w', encoding='utf-8') as f:
            json.dump(metrics_data, f, indent=2, default=str)

        logging.info(f"Metrics exported to {export_path}")
        return export_path
