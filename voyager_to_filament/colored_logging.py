"""
Console logging for voyager-to-filament runs.

Progress lines carry a leading marker (✓ written, → working, • detail) which
the formatter turns into a colour when stderr is a terminal.
"""

import logging
import sys
from typing import Dict, Optional, TextIO


SECTION_RULE = "=" * 60

DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(levelname)s [%(name)s]: %(message)s"

# ANSI escape sequences
RESET = "\033[0m"
BOLD = "\033[1m"

LEVEL_COLORS: Dict[str, str] = {
    "DEBUG": "\033[36m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}

MARKER_COLORS: Dict[str, str] = {
    "✓": BOLD + "\033[92m",
    "→": "\033[94m",
    "•": "\033[96m",
}


class ColoredFormatter(logging.Formatter):
    """
    Formatter colouring records by level, then by their progress marker.

    Plain INFO records are left uncoloured. Colours are dropped entirely when
    ``use_colors`` is false or stderr is not a TTY.
    """

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt or DEFAULT_FORMAT)
        self.use_colors = use_colors and hasattr(sys.stderr, "isatty") and sys.stderr.isatty()

    def color_for(self, record: logging.LogRecord) -> Optional[str]:
        if record.levelname in LEVEL_COLORS and record.levelno != logging.DEBUG:
            return LEVEL_COLORS[record.levelname]

        message = record.getMessage()
        # Summary entries are indented ("   • PostResource")
        marker = message.lstrip()[:1]
        if marker in MARKER_COLORS:
            return MARKER_COLORS[marker]
        if message == SECTION_RULE or (message.startswith("  ") and message.strip().isupper()):
            return BOLD + MARKER_COLORS["•"]
        if record.levelno == logging.DEBUG:
            return LEVEL_COLORS["DEBUG"]
        return None

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if not self.use_colors:
            return formatted
        color = self.color_for(record)
        return f"{color}{formatted}{RESET}" if color else formatted


def setup_colored_logging(
    level: int = logging.INFO,
    use_colors: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Install a single coloured stderr handler on the root logger.

    Debug runs also show the logger name. Django's own loggers stay at
    WARNING unless debugging.
    """
    fmt = VERBOSE_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ColoredFormatter(fmt, use_colors=use_colors))
    handler.setLevel(level)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("django").setLevel(level if level <= logging.DEBUG else logging.WARNING)


def get_colored_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_success(logger: logging.Logger, message: str) -> None:
    logger.info(f"✓ {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    logger.info(f"→ {message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    logger.info(f"• {message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log an upper-cased title between two rules."""
    logger.info(SECTION_RULE)
    logger.info(f"  {section_name.upper()}")
    logger.info(SECTION_RULE)
