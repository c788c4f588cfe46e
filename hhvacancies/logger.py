"""
Structured logging for hhvacancies.

Log lines carry optional JSON context. Request counters live in a separate
RequestMetrics object that is safe to update from several threads.

Only a console handler is attached by default; writing a log file is opt-in
via add_file_handler() (the CLI does this for --log-dir).
"""

import copy
import json
import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class RequestMetrics:
    """Per-operation request counters guarded by a lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._operations: Dict[str, Dict[str, int]] = {}
        self._errors: Dict[str, int] = {}
        self._failed = 0

    def _stats(self, operation: str) -> Dict[str, int]:
        return self._operations.setdefault(operation, {"attempts": 0, "successes": 0})

    def attempt(self, operation: str) -> None:
        with self._lock:
            self._stats(operation)["attempts"] += 1

    def succeeded(self, operation: str) -> None:
        with self._lock:
            self._stats(operation)["successes"] += 1

    def failed(self, operation: str, error_type: str) -> None:
        with self._lock:
            self._stats(operation)
            self._failed += 1
            self._errors[error_type] = self._errors.get(error_type, 0) + 1

    def snapshot(self) -> dict:
        """Independent copy of the counters, with success rates filled in."""
        with self._lock:
            operations = copy.deepcopy(self._operations)
            errors = dict(self._errors)
            failed = self._failed

        for stats in operations.values():
            attempts = stats["attempts"]
            stats["success_rate"] = round(stats["successes"] / attempts, 3) if attempts else 0.0

        return {
            "requests_attempted": sum(s["attempts"] for s in operations.values()),
            "requests_successful": sum(s["successes"] for s in operations.values()),
            "requests_failed": failed,
            "errors_by_type": errors,
            "operations": operations,
        }

    def summary_lines(self) -> List[str]:
        snap = self.snapshot()
        attempted = snap["requests_attempted"]
        rate = round(snap["requests_successful"] / attempted * 100, 1) if attempted else 0.0

        lines = [
            "=== API Session Metrics ===",
            f"Requests: {snap['requests_successful']}/{attempted} ({rate}% success)",
        ]
        for operation, stats in sorted(snap["operations"].items()):
            lines.append(
                f"  {operation}: {stats['successes']}/{stats['attempts']} "
                f"({stats['success_rate'] * 100:.1f}%)"
            )
        if snap["errors_by_type"]:
            lines.append("Error Types:")
            for error_type, count in sorted(snap["errors_by_type"].items()):
                lines.append(f"  {error_type}: {count}")
        return lines


class StructuredLogger:
    """
    Thin wrapper over a stdlib logger that appends keyword context as JSON.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_dir: If given, also write DEBUG and above to a daily file there
        enable_console: Output logs to stderr
    """

    def __init__(
        self,
        name: str = "hhvacancies",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_console: bool = True,
    ):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()
        self.metrics = RequestMetrics()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
            self.logger.addHandler(console_handler)

        if log_dir is not None:
            self.add_file_handler(log_dir)

    def add_file_handler(self, log_dir: Path) -> Path:
        """Start writing to log_dir/hhvacancies_YYYYMMDD.log; returns the file path."""
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"hhvacancies_{datetime.now().strftime('%Y%m%d')}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        self.logger.addHandler(file_handler)
        # the file gets everything, whatever the console level is
        self.logger.setLevel(logging.DEBUG)
        return log_file

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, ensure_ascii=False, default=str)}"
        self.logger.log(level, message)

    def get_metrics(self) -> dict:
        return self.metrics.snapshot()

    def log_metrics_summary(self):
        for line in self.metrics.summary_lines():
            self.info(line)


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "hhvacancies",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the shared logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the shared logger (useful for testing)."""
    global _global_logger
    _global_logger = None
