"""
Structured logging system for the IT-service filtering engine.

Provides centralized logging with console and file destinations,
log levels, and metrics tracking for monitoring how resolutions are answered.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

BRANCHES = ("short_circuit", "single_criterion", "pattern_match")


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for resolution branches and candidate retrieval.
    """

    def __init__(
        self,
        name: str = "itservices",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        # Metrics tracking
        self.metrics = {
            "resolutions": 0,
            "branches": {branch: 0 for branch in BRANCHES},
            "fetches": 0,
            "fetch_failures": 0,
            "errors_by_type": {},
            "patterns_built": 0,
            "candidates_seen": 0,
            "ids_returned": 0,
        }

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"itservices_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            # UUIDs and sets are not JSON-native
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_resolution(self, branch: str, ids_returned: int):
        """Record a finished resolution and the branch that answered it."""
        self.metrics["resolutions"] += 1
        self.metrics["branches"][branch] = self.metrics["branches"].get(branch, 0) + 1
        self.metrics["ids_returned"] += ids_returned

    def record_fetch(self, candidates: int):
        """Record a successful candidate fetch."""
        self.metrics["fetches"] += 1
        self.metrics["candidates_seen"] += candidates

    def record_fetch_failure(self, error_type: str):
        """Record a failed candidate fetch."""
        self.metrics["fetch_failures"] += 1

        # Track error types
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def record_patterns(self, count: int):
        self.metrics["patterns_built"] += count

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        metrics_copy["branches"] = dict(self.metrics["branches"])
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])

        # Calculate branch shares
        total = metrics_copy["resolutions"]
        metrics_copy["branch_share"] = {
            branch: round(count / total, 3) if total > 0 else 0.0
            for branch, count in metrics_copy["branches"].items()
        }

        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Resolution Session Metrics ===")
        self.info(f"Resolutions: {metrics['resolutions']}")
        self.info(
            f"Fetches: {metrics['fetches']} ({metrics['fetch_failures']} failed, "
            f"{metrics['candidates_seen']} candidates)"
        )
        self.info(f"Patterns built: {metrics['patterns_built']}")
        self.info(f"Identifiers returned: {metrics['ids_returned']}")

        if metrics["resolutions"]:
            self.info("Branches:")
            for branch, count in metrics["branches"].items():
                share = metrics["branch_share"][branch] * 100
                self.info(f"  {branch}: {count} ({share:.1f}%)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None

# Handler-less fallback for library callers that configured nothing
_library_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "itservices",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def get_library_logger() -> StructuredLogger:
    """
    Logger for code used as a library.

    Returns the global logger when the application has configured one;
    otherwise a logger with no file or console output, so that library calls
    never create log files. Records still propagate to the root logger.
    """
    global _library_logger

    if _global_logger is not None:
        return _global_logger

    if _library_logger is None:
        _library_logger = StructuredLogger(
            name="itservices.library",
            enable_file=False,
            enable_console=False,
        )
        _library_logger.logger.addHandler(logging.NullHandler())

    return _library_logger


def reset_logger():
    """Reset the global and library loggers (useful for testing)."""
    global _global_logger, _library_logger
    _global_logger = None
    _library_logger = None
