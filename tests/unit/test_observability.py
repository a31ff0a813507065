"""Testes para logging estruturado, operation_id e timed()."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from firesession.observability.context import get_operation_id, operation_scope
from firesession.observability.logging import OperationIdFilter, configure_logging, mask_sid
from firesession.observability.timing import timed


class TestOperationScope:
    """Testa o contexto de operation_id."""

    def test_default_is_empty(self):
        assert get_operation_id() == ""

    def test_scope_sets_and_resets(self):
        with operation_scope("reap") as op_id:
            assert op_id.startswith("reap-")
            assert get_operation_id() == op_id
        assert get_operation_id() == ""

    def test_explicit_operation_id(self):
        with operation_scope("reap", operation_id="fixed"):
            assert get_operation_id() == "fixed"


class TestOperationIdFilter:
    """Testa o filtro que injeta service/operation_id."""

    def _record(self) -> logging.LogRecord:
        return logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    def test_injects_service_and_operation_id(self):
        record = self._record()
        with operation_scope("reap", operation_id="op-1"):
            assert OperationIdFilter("svc").filter(record) is True
        assert record.service == "svc"  # type: ignore[attr-defined]
        assert record.operation_id == "op-1"  # type: ignore[attr-defined]

    def test_preserves_explicit_operation_id(self):
        record = self._record()
        record.operation_id = "explicit"  # type: ignore[attr-defined]
        OperationIdFilter("svc").filter(record)
        assert record.operation_id == "explicit"  # type: ignore[attr-defined]


class TestConfigureLogging:
    """Testa a saída JSON."""

    def test_json_output(self, capsys):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging("INFO", "firesession-test")
            logging.getLogger("firesession.test").info("session_saved")
            line = capsys.readouterr().err.strip().splitlines()[-1]
            payload = json.loads(line)
            assert payload["message"] == "session_saved"
            assert payload["level"] == "INFO"
            assert payload["service"] == "firesession-test"
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)

    def test_text_output(self, capsys):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging("INFO", "firesession-test", fmt="text")
            logging.getLogger("firesession.test").info("session_saved")
            line = capsys.readouterr().err.strip().splitlines()[-1]
            assert "[firesession-test" in line
            assert line.endswith("firesession.test: session_saved")
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)


class TestMaskSid:
    def test_truncates(self):
        assert mask_sid("abcdefghijkl") == "abcdefgh..."

    def test_none_key(self):
        assert mask_sid(None) == "..."


class TestTimed:
    """Testa timed() para medição de latência."""

    def test_logs_component_and_elapsed(self):
        with patch("firesession.observability.timing.logger") as mock_logger:
            with timed("reap", collection="sessions") as stats:
                stats["removed"] = 2

            extra = mock_logger.info.call_args.kwargs["extra"]
            assert extra["component"] == "reap"
            assert extra["collection"] == "sessions"
            assert extra["removed"] == 2
            assert extra["outcome"] == "ok"
            assert extra["elapsed_ms"] >= 0

    def test_logs_error_outcome_and_reraises(self):
        with patch("firesession.observability.timing.logger") as mock_logger:
            with pytest.raises(ValueError):
                with timed("reap"):
                    raise ValueError("boom")

            mock_logger.info.assert_called_once()
            assert mock_logger.info.call_args.kwargs["extra"]["outcome"] == "error"
