"""
Tests for logger functionality.
"""

import uuid

import pytest
from itservices.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["resolutions"] == 0

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        # Should not raise exceptions
        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_log_with_uuid_context(self, tmp_path):
        """Context values that are not JSON-native should be stringified."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )
        manager = uuid.uuid4()

        logger.info("Message with context", manager=manager, filters=("managers",))

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert str(manager) in log_content

    def test_branch_metrics(self, tmp_path):
        """Resolutions should be counted per branch."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.record_resolution("short_circuit", 3)
        logger.record_resolution("pattern_match", 2)
        logger.record_resolution("pattern_match", 0)

        metrics = logger.get_metrics()

        assert metrics["resolutions"] == 3
        assert metrics["ids_returned"] == 5
        assert metrics["branches"]["pattern_match"] == 2
        assert metrics["branches"]["single_criterion"] == 0
        assert metrics["branch_share"]["pattern_match"] == pytest.approx(0.667, rel=0.01)

    def test_fetch_metrics(self, tmp_path):
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.record_fetch(10)
        logger.record_fetch(4)
        logger.record_fetch_failure("OperationalError")
        logger.record_patterns(6)

        metrics = logger.get_metrics()

        assert metrics["fetches"] == 2
        assert metrics["candidates_seen"] == 14
        assert metrics["fetch_failures"] == 1
        assert metrics["errors_by_type"]["OperationalError"] == 1
        assert metrics["patterns_built"] == 6

    def test_get_metrics_returns_copy(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        metrics = logger.get_metrics()
        metrics["branches"]["short_circuit"] = 99

        assert logger.metrics["branches"]["short_circuit"] == 0

    def test_metrics_summary(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_resolution("single_criterion", 1)
        logger.record_fetch_failure("RetrievalError")

        logger.log_metrics_summary()

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert "Resolution Session Metrics" in log_content
        assert "single_criterion: 1 (100.0%)" in log_content
        assert "RetrievalError: 1" in log_content

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Test message")

        log_files = list(tmp_path.glob("itservices_*.log"))
        assert len(log_files) == 1
        assert "Test message" in log_files[0].read_text()


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_fetch(1)

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        assert logger2.metrics["fetches"] == 0
