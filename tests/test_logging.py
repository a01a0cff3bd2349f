"""Tests for logging behavior when unival is used as a library."""
import logging

import pytest
import structlog

from unival.core.logging import _censor_sensitive_keys, get_logger
from unival.forms import FormSchemaBuilder, HtmlAdapter
from unival.validation import validate


@pytest.fixture
def unconfigured_structlog():
    """structlog as a host application that never called configure_logging sees it."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class TestLibraryMode:

    @pytest.mark.asyncio
    async def test_validate_and_generate_keep_stdout_clean(self, unconfigured_structlog, capsys):
        await validate({"a": "x"}, {"a": "min:1|bogus"})
        FormSchemaBuilder.generate([], HtmlAdapter(), {})

        assert capsys.readouterr().out == ""

    @pytest.mark.asyncio
    async def test_events_reach_stdlib_logging(self, unconfigured_structlog, caplog):
        caplog.set_level(logging.DEBUG, logger="unival.validation")

        await validate({"a": "x"}, {"a": "min:1|bogus"})

        messages = [record.getMessage() for record in caplog.records if record.name == "unival.validation"]
        assert any("rule_token_ignored" in message for message in messages)
        assert any("validation_completed" in message for message in messages)

    def test_get_logger_wraps_named_stdlib_logger(self, unconfigured_structlog, caplog):
        caplog.set_level(logging.INFO, logger="unival.test")

        get_logger("unival.test").info("hello", user="ada")

        assert [record.name for record in caplog.records] == ["unival.test"]


class TestRedaction:

    def test_sensitive_keys_are_redacted(self):
        event = {"event": "submit", "password": "hunter2", "payload": {"Token": "abc", "email": "ada@example.com"}}

        redacted = _censor_sensitive_keys(None, "info", event)

        assert redacted["password"] == "[REDACTED]"
        assert redacted["payload"] == {"Token": "[REDACTED]", "email": "ada@example.com"}
