"""
    Copyright 2026 Inmanta

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at

        http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions and
    limitations under the License.

    Contact: code@inmanta.com
"""

import logging
import sys
from typing import Optional, TextIO

import colorlog
from colorlog.formatter import LogColors


LOGGER = logging.getLogger(__name__)

"""
This dictionary maps the verbosity of the command line to the corresponding Python log levels
"""
log_levels = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

_handler: Optional[logging.Handler] = None

DEFAULT_LOG_COLORS: LogColors = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}


def _is_on_tty(stream: TextIO) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


class MultiLineFormatter(colorlog.ColoredFormatter):
    """
    Formatter for multi-line log records.

    This class extends the `colorlog.ColoredFormatter` class to indent all lines of a log record after the first one, so
    they line up with the end of the log header.
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        *,
        log_colors: Optional[LogColors] = None,
        reset: bool = True,
        no_color: bool = False,
    ):
        """
        Initialize a new `MultiLineFormatter` instance.

        :param fmt: Optional string specifying the log record format.
        :param log_colors: Optional `LogColors` object mapping log level names to color codes.
        :param reset: Boolean indicating whether to reset terminal colors at the end of each log record.
        :param no_color: Boolean indicating whether to disable colors in the output.
        """
        super().__init__(fmt, log_colors=log_colors, reset=reset, no_color=no_color)
        self.fmt = fmt

    def get_header_length(self, record: logging.LogRecord) -> int:
        """
        Get the header length of a given log record.

        :param record: The `logging.LogRecord` object for which to calculate the header length.
        :return: The length of the header in the log record, without color codes.
        """
        # to get the length of the header we want to get the header without the color codes
        formatter = colorlog.ColoredFormatter(
            fmt=self.fmt,
            log_colors=self.log_colors,
            reset=False,
            no_color=True,
        )
        header = formatter.format(
            logging.LogRecord(
                record.name,
                record.levelno,
                record.pathname,
                record.lineno,
                "",
                (),
                None,
            )
        )
        return len(header)

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record with added indentation.

        :param record: The `logging.LogRecord` object to format.
        :return: The formatted log record as a string.
        """
        indent: str = " " * self.get_header_length(record)
        head, *tail = super().format(record).splitlines(True)
        return head + "".join(indent + line for line in tail)


def get_log_formatter(no_color: bool = False) -> MultiLineFormatter:
    return MultiLineFormatter(
        fmt="%(log_color)s%(name)-25s%(levelname)-8s%(reset)s%(blue)s%(message)s",
        log_colors=DEFAULT_LOG_COLORS,
        reset=True,
        no_color=no_color,
    )


def setup_logging(verbosity: int, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Install a log handler on the root logger that writes to the given stream.

    :param verbosity: the number of times `-v` was passed on the command line
    :param stream: the stream to log to, defaults to the current stderr
    :return: the installed handler
    """
    if stream is None:
        stream = sys.stderr
    level = log_levels.get(verbosity, logging.DEBUG)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(get_log_formatter(no_color=not _is_on_tty(stream)))
    handler.setLevel(level)

    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = handler
    root.addHandler(handler)
    root.setLevel(level)
    LOGGER.debug("Logging configured at level %s", logging.getLevelName(level))
    return handler
