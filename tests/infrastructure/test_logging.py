"""Tests for centralized logging."""

import io
import json
import logging
import sys
from shipyard.infrastructure.logging import (
    ConsoleFormatter,
    JSONFormatter,
    configure_logging,
)


def _record(msg="deploying", args=(), level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="shipyard.application.use_cases.container_orchestrator",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    def test_level(self):
        configure_logging(level=logging.DEBUG)
        assert logging.getLogger("shipyard").level == logging.DEBUG

    def test_json_format(self):
        configure_logging(level=logging.INFO, log_format="json")
        logger = logging.getLogger("shipyard")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_unknown_format_falls_back_to_text(self):
        configure_logging(level=logging.INFO, log_format="xml")
        handler = logging.getLogger("shipyard").handlers[0]
        assert isinstance(handler.formatter, ConsoleFormatter)

    def test_replaces_handlers(self):
        configure_logging(level=logging.INFO)
        configure_logging(level=logging.DEBUG)
        assert len(logging.getLogger("shipyard").handlers) == 1

    def test_lifecycle_context_reaches_stream(self):
        stream = io.StringIO()
        configure_logging(level=logging.INFO, log_format="json", stream=stream)

        logging.getLogger("shipyard.application.executors.remote_executor").info(
            "importing %s on %s", "app-7", "10.0.0.5",
            extra={"address": "10.0.0.5", "operation": "deploy"},
        )

        entry = json.loads(stream.getvalue())
        assert entry["message"] == "importing app-7 on 10.0.0.5"
        assert entry["address"] == "10.0.0.5"
        assert entry["operation"] == "deploy"


class TestJSONFormatter:
    def test_plain_record(self):
        entry = json.loads(JSONFormatter().format(_record("cleanup on %s", ("10.0.0.5",))))
        assert entry["level"] == "INFO"
        assert entry["message"] == "cleanup on 10.0.0.5"
        assert "timestamp" in entry
        assert "address" not in entry
        assert "exception" not in entry

    def test_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()
        entry = json.loads(
            JSONFormatter().format(_record("failed", level=logging.ERROR, exc_info=exc_info))
        )
        assert "RuntimeError: boom" in entry["exception"]


class TestConsoleFormatter:
    def test_appends_context(self):
        line = ConsoleFormatter().format(
            _record("undeploying", operation="undeploy", address="localhost")
        )
        assert line.endswith("undeploying operation=undeploy address=localhost")

    def test_without_context(self):
        line = ConsoleFormatter().format(_record("building"))
        assert line.endswith("container_orchestrator: building")
