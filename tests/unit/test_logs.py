"""Tests for structlog configuration."""

import pytest
import structlog

from simpleswap.config import PoolConfig
from simpleswap.logs import configure_from_config, configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_console_renderer_by_default(self):
        """Console output is the default."""
        configure_logging()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer(self):
        """json=True renders JSON lines."""
        configure_logging("DEBUG", json=True)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_level_filter(self, capsys):
        """Events below the configured level are dropped."""
        configure_logging("WARNING", json=True)
        logger = structlog.get_logger()

        logger.info("hidden")
        logger.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert '"event": "shown"' in out

    def test_unknown_level(self):
        """Unknown level names are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("CHATTY")

    def test_from_config(self):
        """configure_from_config applies the config's level and format."""
        configure_from_config(PoolConfig(log_level="ERROR", log_json=True))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
