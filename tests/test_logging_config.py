import io
import logging

import search_portal.logging_config as lc


def test_setup_logging_string_level():
    lc.setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_unknown_level_falls_back_to_info():
    lc.setup_logging("chatty")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_uses_settings_when_level_missing(monkeypatch):
    monkeypatch.setattr("search_portal.config.settings.log_level", "WARNING")
    lc.setup_logging(None)
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_writes_formatted_lines_and_quiets_noisy_loggers():
    stream = io.StringIO()
    lc.setup_logging(logging.INFO, stream=stream)
    logging.getLogger("search_portal.test").info("hello")
    assert "[INFO] search_portal.test: hello" in stream.getvalue()
    assert len(logging.getLogger().handlers) == 1
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
