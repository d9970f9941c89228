"""Unit tests for the structured logger."""

import io
import json

import pytest

import internal.logging
from internal.logging import LogLevel, StructuredLogger, get_logger


class TestStructuredLogger:
    """Tests for StructuredLogger class."""

    def test_emits_json_line(self):
        """Records are one JSON object per line."""
        stream = io.StringIO()
        logger = StructuredLogger(LogLevel.DEBUG, stream=stream)
        logger.info("hash id built", id="abc")
        record = json.loads(stream.getvalue())
        assert record["level"] == "INFO"
        assert record["msg"] == "hash id built"
        assert record["id"] == "abc"
        assert "timestamp" in record

    def test_level_filter(self):
        """Records below the minimum level are dropped."""
        stream = io.StringIO()
        logger = StructuredLogger(LogLevel.WARN, stream=stream)
        logger.debug("skip")
        logger.info("skip")
        assert stream.getvalue() == ""
        logger.warn("keep")
        assert stream.getvalue() != ""

    def test_error_field(self):
        """error= is rendered as err."""
        stream = io.StringIO()
        logger = StructuredLogger(stream=stream)
        logger.error("clock sample failed", error=OSError("gone"))
        assert json.loads(stream.getvalue())["err"] == "gone"


class TestLogLevel:
    """Tests for LogLevel parsing."""

    @pytest.mark.parametrize("name,level", [
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("warning", LogLevel.WARN),
        ("WARN", LogLevel.WARN),
        ("error", LogLevel.ERROR),
    ])
    def test_parse(self, name, level):
        """Names parse case-insensitively."""
        assert LogLevel.parse(name) == level


class TestGetLogger:
    """Tests for the process-wide logger."""

    def test_configure_replaces_logger(self, reset_logger):
        """configure() installs a new shared logger."""
        logger = StructuredLogger.configure(LogLevel.ERROR)
        assert get_logger() is logger
        assert get_logger().level == LogLevel.ERROR

    def test_default_level_from_config(self, reset_logger):
        """Lazy logger takes its level from config.json."""
        internal.logging._logger = None
        assert get_logger().level == LogLevel.WARN

    def test_identifier_warnings_logged(self, reset_logger):
        """Rejected hashes are logged at WARN."""
        from core.errors import MalformedInputError
        from core.identifier import HashIDBuilder

        stream = io.StringIO()
        StructuredLogger.configure(LogLevel.WARN, stream=stream)
        with pytest.raises(MalformedInputError):
            HashIDBuilder(b"short", clock=lambda: bytes(12))
        record = json.loads(stream.getvalue())
        assert record["msg"] == "hash rejected"
        assert record["component"] == "hash"
