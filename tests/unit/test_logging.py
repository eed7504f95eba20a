"""Unit tests for logging helpers."""

import io
import logging

from graphite_ci.observability.logging import (
    DecisionLogger,
    WorkflowCommandFormatter,
    configure_logging,
    escape_data,
)


def _record(level, message):
    return logging.LogRecord("graphite_ci.test", level, __file__, 1, message, None, None)


class TestWorkflowCommandFormatter:

    def test_levels_map_to_commands(self):
        formatter = WorkflowCommandFormatter("%(message)s")

        assert formatter.format(_record(logging.DEBUG, "d")) == "::debug::d"
        assert formatter.format(_record(logging.INFO, "i")) == "i"
        assert formatter.format(_record(logging.WARNING, "w")) == "::warning::w"
        assert formatter.format(_record(logging.ERROR, "e")) == "::error::e"

    def test_escaping(self):
        assert escape_data("100%\r\ndone") == "100%25%0D%0Adone"
        formatter = WorkflowCommandFormatter("%(message)s")
        assert formatter.format(_record(logging.WARNING, "a\nb")) == "::warning::a%0Ab"


class TestConfigureLogging:

    def test_routes_graphite_loggers(self):
        stream = io.StringIO()
        configure_logging(stream=stream)

        logging.getLogger("graphite_ci.requester.gate").warning("careful")
        logging.getLogger("graphite_ci.requester.gate").debug("hidden")

        assert stream.getvalue() == "::warning::careful\n"

    def test_verbose_and_idempotent(self):
        stream = io.StringIO()
        configure_logging(stream=io.StringIO())
        configure_logging(verbose=True, stream=stream)

        logging.getLogger("graphite_ci.main").debug("shown")

        assert stream.getvalue() == "::debug::shown\n"
        assert len(logging.getLogger("graphite_ci").handlers) == 1


class TestDecisionLogger:

    def test_structured_fields(self, run_context, caplog):
        caplog.set_level(logging.DEBUG, logger="graphite_ci")
        log = DecisionLogger("optimizer", run_context)

        log.warning("Response returned a non-200 status", status=500)

        assert caplog.records[-1].name == "graphite_ci.requester.optimizer"
        assert caplog.records[-1].message == (
            "[policy=optimizer repo=withgraphite/monorepo pr=42 status=500] "
            "Response returned a non-200 status"
        )

    def test_error_includes_exception(self, caplog):
        log = DecisionLogger("gate")

        log.error("failed", error=ValueError("bad"))

        assert caplog.records[-1].message == "[policy=gate error_type=ValueError error_msg=bad] failed"

    def test_track_request(self, caplog):
        caplog.set_level(logging.DEBUG, logger="graphite_ci")
        log = DecisionLogger("gate")

        with log.track_request("https://graphite.test/api/v1/ci", request_id="abc") as meta:
            meta["status_code"] = 200

        messages = [r.message for r in caplog.records]
        assert messages[0] == "[policy=gate url=https://graphite.test/api/v1/ci request_id=abc] Requesting decision"
        assert messages[1].startswith("[policy=gate request_id=abc duration_ms=")
        assert messages[1].endswith("status=200] Decision request completed")

    def test_track_request_reraises(self, caplog):
        caplog.set_level(logging.DEBUG, logger="graphite_ci")
        log = DecisionLogger("gate")

        try:
            with log.track_request("https://graphite.test", request_id="abc"):
                raise RuntimeError("nope")
        except RuntimeError:
            pass
        else:
            raise AssertionError("expected RuntimeError")

        assert "error_type=RuntimeError" in caplog.records[-1].message
