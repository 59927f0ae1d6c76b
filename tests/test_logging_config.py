"""
Tests for configuration and structured logging
"""

import json
import logging

from treasury_sim.config import TreasuryConfig, get_config, reload_config
from treasury_sim.logging_config import JSONFormatter, TextFormatter, log_action, setup_logging


class TestTreasuryConfig:
    """Test environment-driven configuration"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TREASURY_API_PORT", raising=False)
        config = TreasuryConfig(_env_file=None)
        assert config.api_port == 8090
        assert config.log_format == "json"
        assert config.seed_on_startup is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TREASURY_API_PORT", "9100")
        monkeypatch.setenv("TREASURY_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TREASURY_SEED_ON_STARTUP", "false")

        config = reload_config()

        assert config.api_port == 9100
        assert config.log_level == "DEBUG"
        assert config.seed_on_startup is False
        assert get_config() is config

        monkeypatch.undo()
        reload_config()


class TestStructuredLogging:
    """Test formatters and log_action"""

    def make_record(self, logger_name="treasury.test", **fields):
        record = logging.LogRecord(logger_name, logging.INFO, __file__, 1, "hello %s", ("world",), None)
        for name, value in fields.items():
            setattr(record, name, value)
        return record

    def test_json_formatter(self):
        record = self.make_record(action="commit_transfer", resource="transaction:t1",
                                  extra={"amount": "10"})
        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["action"] == "commit_transfer"
        assert entry["extra"] == {"amount": "10"}
        assert "correlation_id" not in entry

    def test_text_formatter(self):
        line = TextFormatter().format(self.make_record(action="scheduler_tick", resource="scheduler"))
        assert line.endswith("hello world [scheduler_tick scheduler]")

    def test_log_action_attaches_structured_fields(self, caplog):
        logger = logging.getLogger("treasury.test.actions")
        with caplog.at_level(logging.WARNING, logger="treasury.test.actions"):
            log_action(logger, "warning", "Transfer rejected", action="reject_transfer",
                       resource="account:X")
            log_action(logger, "info", "below threshold")

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.action == "reject_transfer"
        assert record.resource == "account:X"
        assert not hasattr(record, "correlation_id")

    def test_setup_logging_replaces_handlers(self):
        logger = setup_logging("DEBUG", "text", logger_name="treasury.test.setup")
        setup_logging("INFO", "json", logger_name="treasury.test.setup")

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.level == logging.INFO
