"""
Tests for structured logging and LLM audit records.
"""
import json
import logging

from knowledge_ai.ai.llm_audit_logger import LLMCallRecord, log_llm_call
from knowledge_ai.core.logging import JSONFormatter


class TestJSONFormatter:

    def _record(self, **extra):
        record = logging.LogRecord("knowledge_ai.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_single_line_json(self):
        line = JSONFormatter().format(self._record())
        entry = json.loads(line)
        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "knowledge_ai.test"
        assert "\n" not in line

    def test_extras_promoted(self):
        entry = json.loads(JSONFormatter().format(
            self._record(event="ai_call", provider="qwen", model="qwen-max", custom=1)
        ))
        assert entry["event"] == "ai_call"
        assert entry["provider"] == "qwen"
        assert entry["model"] == "qwen-max"
        assert entry["custom"] == 1

    def test_non_serializable_extras_rendered_as_text(self):
        entry = json.loads(JSONFormatter().format(self._record(blob=object())))
        assert entry["blob"].startswith("<object object")

    def test_credential_extras_masked(self):
        entry = json.loads(JSONFormatter().format(
            self._record(api_key="sk-secret", Authorization="Bearer sk-secret", provider="openai")
        ))
        assert entry["api_key"] == "***"
        assert entry["Authorization"] == "***"
        assert entry["provider"] == "openai"

    def test_promoted_fields_come_first(self):
        entry = json.loads(JSONFormatter().format(
            self._record(custom="c", error="boom", event="ai_call")
        ))
        keys = list(entry)
        assert keys[4:7] == ["event", "error", "custom"]

    def test_non_ascii_kept_readable(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "通义千问", None, None)
        assert "通义千问" in JSONFormatter().format(record)


class TestLLMCallRecord:

    def test_prompt_hash(self):
        h1 = LLMCallRecord.hash_prompt("test prompt")
        h2 = LLMCallRecord.hash_prompt("test prompt")
        h3 = LLMCallRecord.hash_prompt("different prompt")
        assert h1 == h2
        assert h1 != h3
        assert len(h1) == 64

    def test_failure_record_logged_as_error(self, caplog):
        record = LLMCallRecord(
            provider="gemini",
            model="gemini-1.5-pro",
            operation="generate",
            prompt_hash="def456",
            prompt_length=1000,
            success=False,
            status_code=403,
            error="access denied",
        )
        with caplog.at_level(logging.INFO, logger="knowledge_ai"):
            log_llm_call(record)

        (logged,) = caplog.records
        assert logged.levelno == logging.ERROR
        assert logged.event == "llm_audit"
        assert logged.error == "access denied"
        assert logged.status_code == 403

    def test_success_record_logged_as_info(self, caplog):
        record = LLMCallRecord(
            provider="openai",
            model="gpt-4o-mini",
            operation="generate",
            prompt_hash="abc123",
            prompt_length=500,
            success=True,
            latency_ms=150.0,
        )
        with caplog.at_level(logging.INFO, logger="knowledge_ai"):
            log_llm_call(record)

        (logged,) = caplog.records
        assert logged.levelno == logging.INFO
        assert not hasattr(logged, "error")


class TestSetupLogging:

    def test_installs_json_handler_once(self, monkeypatch):
        import knowledge_ai.core.logging as logging_mod

        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        monkeypatch.setattr(logging_mod, "_initialized", False)
        try:
            logging_mod.setup_logging("debug")
            logging_mod.setup_logging("error")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_level_from_settings_and_custom_stream(self, monkeypatch):
        import io

        import knowledge_ai.core.logging as logging_mod
        from knowledge_ai.config import settings

        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        monkeypatch.setattr(logging_mod, "_initialized", False)
        monkeypatch.setattr(settings, "LOG_LEVEL", "warning")
        stream = io.StringIO()
        try:
            logging_mod.setup_logging(stream=stream)
            logging.getLogger("knowledge_ai.test").warning("kept", extra={"api_key": "sk-x"})
            logging.getLogger("knowledge_ai.test").info("filtered")

            assert root.level == logging.WARNING
            (line,) = stream.getvalue().splitlines()
            entry = json.loads(line)
            assert entry["message"] == "kept"
            assert entry["api_key"] == "***"
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
