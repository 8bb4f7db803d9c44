import logging
import sys
from typing import TextIO

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s %(funcName)s():%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Mail delivery and the daily scheduler log every send and every job run at INFO.
QUIET_LOGGERS = ('yagmail', 'smtplib', 'schedule')

LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',
    logging.INFO: '\033[32m',
    logging.WARNING: '\033[33m',
    logging.ERROR: '\033[31m',
    logging.CRITICAL: '\033[35m',
}
RESET = '\033[0m'
BOLD = '\033[1m'


class LevelColorFormatter(logging.Formatter):
    """Paints the level name of standard levels; the record itself is left untouched."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        painted = logging.makeLogRecord(record.__dict__)
        painted.levelname = f"{color}{BOLD}{record.levelname}{RESET}"
        return super().format(painted)


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


def setup_logging(level: int | str = logging.INFO, stream: TextIO | None = None, colored: bool | None = None) -> None:
    """Log report runs to stdout (or the given stream); colored level names on a terminal by default."""
    level = resolve_level(level)
    if stream is None:
        stream = sys.stdout
    if colored is None:
        colored = stream.isatty()

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    formatter_class = LevelColorFormatter if colored else logging.Formatter
    handler.setFormatter(formatter_class(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
