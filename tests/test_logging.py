"""
Tests for doc_epub.logging.

Tests verify:
- LogContext binds and unbinds context variables
- configure_logging renders JSON with service metadata
"""

from __future__ import annotations

import json

import structlog

from doc_epub.logging import LogContext, bind_context, configure_logging, get_logger, unbind_context


class TestContext:
    def teardown_method(self):
        structlog.contextvars.clear_contextvars()

    def test_bind_and_unbind(self):
        bind_context(project="demo")
        assert structlog.contextvars.get_contextvars() == {"project": "demo"}
        unbind_context("project")
        assert structlog.contextvars.get_contextvars() == {}

    def test_log_context_scope(self):
        with LogContext(project="demo", version="1.0.0"):
            assert structlog.contextvars.get_contextvars() == {"project": "demo", "version": "1.0.0"}
        assert structlog.contextvars.get_contextvars() == {}


class TestConfigureLogging:
    def test_json_output(self, capsys):
        configure_logging(level="INFO", json_format=True, service="doc-epub-test")
        with LogContext(project="demo"):
            get_logger(__name__).info("epub.build_started", entities=3)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "epub.build_started"
        assert event["entities"] == 3
        assert event["project"] == "demo"
        assert event["service"] == "doc-epub-test"
        assert event["level"] == "info"

    def test_debug_suppressed_at_info(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger(__name__).debug("epub.phase_completed")
        assert "epub.phase_completed" not in capsys.readouterr().err
