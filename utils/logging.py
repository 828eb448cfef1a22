import atexit
import logging
import logging.handlers
import os
import sys
from queue import Queue
from typing import Any, ClassVar, Optional

ROOT_LOGGER_NAME = "arcaea_toolbox"

PLAIN_FORMAT = "[{asctime}] [{levelname:<8}] {name}: {message}"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def stream_supports_colour(stream: Any) -> bool:
    # https://no-color.org
    if "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True

    is_a_tty = hasattr(stream, "isatty") and stream.isatty()
    if sys.platform != "win32":
        return is_a_tty

    # Windows Terminal and ConEmu understand ANSI codes, the old console does not.
    return is_a_tty and ("ANSICON" in os.environ or "WT_SESSION" in os.environ)


class ColorFormatter(logging.Formatter):
    """Plain format with the level and logger name coloured by ANSI codes."""

    LEVEL_COLOURS: ClassVar[dict[int, str]] = {
        logging.DEBUG: "\x1b[40;1m",
        logging.INFO: "\x1b[34;1m",
        logging.WARNING: "\x1b[33;1m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[41m",
    }

    FORMATS: ClassVar[dict[int, logging.Formatter]] = {
        level: logging.Formatter(
            f"\x1b[30;1m%(asctime)s\x1b[0m {colour}%(levelname)-8s\x1b[0m "
            "\x1b[35m%(name)s\x1b[0m %(message)s",
            DATE_FORMAT,
        )
        for level, colour in LEVEL_COLOURS.items()
    }

    def format(self, record):
        formatter = self.FORMATS.get(record.levelno, self.FORMATS[logging.DEBUG])

        if record.exc_info:
            text = formatter.formatException(record.exc_info)
            record.exc_text = f"\x1b[31m{text}\x1b[0m"

        output = formatter.format(record)

        # The coloured traceback must not leak into other handlers.
        record.exc_text = None
        return output


class QueueListenerHandler(logging.handlers.QueueHandler):
    """Hands records to ``handlers`` on a background thread."""

    def __init__(self, *handlers: logging.Handler) -> None:
        super().__init__(Queue(-1))
        self._listener = logging.handlers.QueueListener(
            self.queue, *handlers, respect_handler_level=True
        )
        self._listener.start()
        self._running = True
        atexit.register(self.close)

    def emit(self, record):
        try:
            self.enqueue(record)
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def close(self):
        # Flushes the queue. Safe to call more than once.
        if self._running:
            self._running = False
            self._listener.stop()
        super().close()


def setup_handler(
    handler: logging.Handler,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    if formatter is None:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ) and stream_supports_colour(handler.stream):
            formatter = ColorFormatter()
        else:
            formatter = logging.Formatter(PLAIN_FORMAT, DATE_FORMAT, style="{")

    handler.setFormatter(formatter)
    return handler


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    *,
    handler: Optional[logging.Handler] = None,
    formatter: Optional[logging.Formatter] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    if handler is None:
        handler = setup_handler(logging.StreamHandler(), formatter)
    elif formatter is not None:
        handler.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.addHandler(handler)
    return logger


def setup_file_logging(
    filename: str, *, name: str = ROOT_LOGGER_NAME, level: int = logging.INFO
) -> logging.Logger:
    """Log to the console and a rotating file through a background queue."""
    return setup_logging(
        name,
        handler=QueueListenerHandler(
            setup_handler(logging.StreamHandler()),
            setup_handler(
                logging.handlers.RotatingFileHandler(
                    filename=filename,
                    encoding="utf-8",
                    maxBytes=4 * 1024 * 1024,
                    backupCount=3,
                ),
            ),
        ),
        level=level,
    )


logger = logging.getLogger(ROOT_LOGGER_NAME)
