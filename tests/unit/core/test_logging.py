"""Tests for logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from sandboxkit.core.logging import LOG_FORMAT, configure_logging, get_logger, resolve_level


class TestResolveLevel:
    """Tests for CLI flag to level mapping."""

    def test_default_is_warning(self) -> None:
        assert resolve_level() == logging.WARNING

    def test_quiet_beats_debug(self) -> None:
        assert resolve_level(quiet=True, debug=True) == logging.ERROR

    def test_debug_beats_verbose(self) -> None:
        assert resolve_level(debug=True, verbose=True) == logging.DEBUG

    def test_verbose(self) -> None:
        assert resolve_level(verbose=True) == logging.INFO


def test_configure_logging_sets_root_level() -> None:
    configure_logging(verbose=True)
    assert logging.getLogger().level == logging.INFO
    configure_logging()
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_uses_rich_handler_on_stderr() -> None:
    configure_logging()

    handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1
    assert handlers[0].console.stderr is True
    assert handlers[0].formatter._fmt == LOG_FORMAT


def test_get_logger_uses_name() -> None:
    assert get_logger("sandboxkit.test").name == "sandboxkit.test"
