"""Tests for host notifiers, document events, and logging setup."""

import io
import logging

import pytest
from rich.console import Console

from cartree.config.models import LoggingSettings
from cartree.host import ConsoleNotifier, DocumentOpenedEmitter, LoggingNotifier
from cartree.logs import configure_logging


def test_logging_notifier_logs_at_info(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="cartree.host.real")

    LoggingNotifier().notify("No workspace!")

    assert [record.getMessage() for record in caplog.records] == ["No workspace!"]


def test_console_notifier_prints_unless_quiet() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, width=120)

    ConsoleNotifier(console).notify("No workspace!")
    ConsoleNotifier(console, quiet=True).notify("hidden")

    assert "No workspace!" in buffer.getvalue()
    assert "hidden" not in buffer.getvalue()


def test_document_emitter_delivers_paths_in_order() -> None:
    events = DocumentOpenedEmitter()
    opened: list[str] = []
    subscription = events.on_document_opened(opened.append)

    events.open_document("/ws/a.isml")
    events.open_document("/ws/b.isml")
    subscription.dispose()
    events.open_document("/ws/c.isml")

    assert opened == ["/ws/a.isml", "/ws/b.isml"]
    assert events.listener_count == 0


def test_configure_logging_installs_single_handler() -> None:
    console = Console(file=io.StringIO())

    logger = configure_logging(LoggingSettings(level="debug"), console=console)
    configure_logging(LoggingSettings(level="INFO"), console=console)

    names = [handler.get_name() for handler in logger.handlers]
    assert names.count("cartree-rich") == 1
    assert logger.level == logging.INFO


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_logging(LoggingSettings(level="chatty"))
