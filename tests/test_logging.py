"""Tests for initswitch.core.logging module."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import structlog

from initswitch.core.logging import (
    SENSITIVE_PATTERNS,
    ServiceContext,
    ServiceLogger,
    _add_context,
    _sanitize_event_dict,
    _sanitize_value,
    configure_logging,
    get_current_context,
    get_logger,
    with_context,
)


class TestSensitivePatterns:
    """Tests for sensitive field detection and sanitization."""

    def test_known_sensitive_patterns(self):
        assert "password" in SENSITIVE_PATTERNS
        assert "token" in SENSITIVE_PATTERNS

    def test_sanitize_value_redacts_compound_keys(self):
        assert _sanitize_value("DB_PASSWORD", "hunter2") == "[REDACTED]"
        assert _sanitize_value("bearer_token", "abc") == "[REDACTED]"

    def test_sanitize_value_preserves_safe_values(self):
        assert _sanitize_value("job", "ssh") == "ssh"
        assert _sanitize_value("returncode", 1) == 1

    def test_sanitize_event_dict_nested(self):
        event_dict = {"event": "x", "env": {"secret": "s", "PATH": "/bin"}}
        result = _sanitize_event_dict(None, "info", event_dict)
        assert result["env"] == {"secret": "[REDACTED]", "PATH": "/bin"}


class TestServiceContext:
    def test_request_ids_are_unique(self):
        first, second = ServiceContext("ssh", "enable"), ServiceContext("ssh", "enable")
        assert first.request_id != second.request_id

    def test_with_provider_keeps_request_id(self):
        ctx = ServiceContext("ssh", "start")
        child = ctx.with_provider("upstart")
        assert child.provider == "upstart"
        assert child.request_id == ctx.request_id
        assert ctx.provider == "compat"

    def test_with_context_restores_previous(self):
        outer = ServiceContext("ssh", "enable")
        inner = ServiceContext("cron", "disable")
        assert get_current_context() is None
        with with_context(outer):
            with with_context(inner):
                assert get_current_context() is inner
            assert get_current_context() is outer
        assert get_current_context() is None

    def test_with_context_resets_on_error(self):
        with pytest.raises(RuntimeError):
            with with_context(ServiceContext("ssh", "enable")):
                raise RuntimeError("boom")
        assert get_current_context() is None

    def test_add_context_processor(self):
        with with_context(ServiceContext("ssh", "enable", request_id="abc")):
            result = _add_context(None, "info", {"event": "x", "job": "explicit"})
        assert result["job"] == "explicit"
        assert result["operation"] == "enable"
        assert result["request_id"] == "abc"


class TestServiceLogger:
    def test_get_logger_returns_service_logger(self):
        logger = get_logger("upstart")
        assert isinstance(logger, ServiceLogger)

    def test_initial_context_is_bound(self):
        logger = get_logger("upstart", tier="post_b")
        assert logger._context == {"component": "upstart", "tier": "post_b"}


class TestConfigureLogging:
    def test_both_requires_file(self):
        with pytest.raises(ValueError, match="file_path is required"):
            configure_logging(format="both")

    def test_console_installs_stderr_handler(self):
        configure_logging(level="INFO", format="console")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_json_to_file(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "initswitch.log"
        configure_logging(level="DEBUG", format="json", file_path=log_file)

        with with_context(ServiceContext("ssh", "disable", request_id="r1")):
            get_logger("upstart").info("job_disabled", tier="post_b", token="t0p")
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert entry["event"] == "job_disabled"
        assert entry["component"] == "upstart"
        assert entry["job"] == "ssh"
        assert entry["request_id"] == "r1"
        assert entry["token"] == "[REDACTED]"
        assert "timestamp" in entry

    def test_level_filters_events(self, tmp_path: Path):
        log_file = tmp_path / "initswitch.log"
        configure_logging(level="WARNING", format="json", file_path=log_file,
                          include_timestamps=False)

        logger = get_logger("sysvinit")
        logger.info("hidden")
        logger.warning("shown")
        for handler in logging.getLogger().handlers:
            handler.flush()

        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert events == ["shown"]

    def test_module_loggers_pick_up_late_configuration(self):
        logger = get_logger("early")
        configure_logging(level="DEBUG", format="console")
        assert structlog.is_configured()
        logger.debug("after_configure")
