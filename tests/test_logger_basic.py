from __future__ import annotations

import logging

from wsirc.logs.logger import ClientLogger


def test_logger_template_and_fallback(caplog) -> None:  # type: ignore[no-untyped-def]
    log = ClientLogger("test_logger")
    caplog.set_level(logging.INFO)

    log.log_event("app", "start")
    log.log_event("custom_domain", "custom_action", extra_field=123)

    msgs = [r.message for r in caplog.records]
    if not any("Starting WebSocket IRC client" in m for m in msgs):
        raise AssertionError("Expected start template message in logs")
    if not any("custom domain: custom action" in m for m in msgs):
        raise AssertionError("Expected derived fallback for unknown template")


def test_logger_template_uses_context(caplog) -> None:  # type: ignore[no-untyped-def]
    log = ClientLogger("test_logger2")
    caplog.set_level(logging.INFO)

    log.log_event("irc", "privmsg", nick="bot", sender="alice", text="hello world")

    msgs = [r.message for r in caplog.records]
    assert any("alice> hello world" in m for m in msgs)
    assert any(m.startswith("[bot") for m in msgs)


def test_logger_missing_template_key_keeps_raw_template(caplog) -> None:  # type: ignore[no-untyped-def]
    log = ClientLogger("test_logger3")
    caplog.set_level(logging.INFO)

    log.log_event("irc", "privmsg")

    assert any("{sender}" in r.message for r in caplog.records)


def test_logger_debug_alignment(caplog, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("DEBUG", "1")
    log = ClientLogger("test_logger4")
    caplog.set_level(logging.DEBUG)
    log.log_event("app", "start", extra=1)
    first = [r.message for r in caplog.records][0]
    assert "app_start" in first
    assert len(first.split("[")[0]) >= 32
    assert "(extra=1)" in first


def test_logger_forced_debug_without_env(caplog, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.delenv("DEBUG", raising=False)
    log = ClientLogger("test_logger5")
    caplog.set_level(logging.DEBUG)
    log.set_debug(True)

    log.log_event("irc", "raw", level=logging.DEBUG, raw=":server 001 bot :hi")

    assert any(
        "irc_raw" in r.message and "==> :server 001 bot :hi" in r.message
        for r in caplog.records
    )
