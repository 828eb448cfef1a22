import io
import logging

import pytest

from utils.logging import (
    ColorFormatter,
    QueueListenerHandler,
    setup_handler,
    setup_logging,
    stream_supports_colour,
)


@pytest.fixture
def isolated_logger():
    logger = logging.getLogger("arcaea_toolbox.tests.logging")
    yield logger
    logger.handlers.clear()


def test_stream_supports_colour_respects_no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("FORCE_COLOR", "1")

    assert not stream_supports_colour(io.StringIO())


def test_stream_supports_colour_without_tty(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)

    assert not stream_supports_colour(io.StringIO())


def test_setup_handler_uses_plain_format_without_colour(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")

    handler = setup_handler(logging.StreamHandler(io.StringIO()))

    assert not isinstance(handler.formatter, ColorFormatter)


def test_color_formatter_colours_level():
    record = logging.LogRecord(
        "arcaea_toolbox", logging.WARNING, __file__, 1, "Skipped %s", ("x@ftr",), None
    )

    output = ColorFormatter().format(record)

    assert "\x1b[33;1mWARNING" in output
    assert output.endswith("Skipped x@ftr")


def test_setup_logging(isolated_logger):
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)

    logger = setup_logging(
        isolated_logger.name,
        handler=handler,
        formatter=logging.Formatter("%(levelname)s %(message)s"),
        level=logging.DEBUG,
    )
    logger.debug("constant %s", "9.7")

    assert logger is isolated_logger
    assert stream.getvalue() == "DEBUG constant 9.7\n"


def test_queue_listener_handler(isolated_logger):
    stream = io.StringIO()
    target = logging.StreamHandler(stream)
    target.setFormatter(logging.Formatter("%(message)s"))
    handler = QueueListenerHandler(target)

    setup_logging(isolated_logger.name, handler=handler)
    isolated_logger.info("imported %d scores", 3)
    handler.close()

    assert stream.getvalue() == "imported 3 scores\n"
