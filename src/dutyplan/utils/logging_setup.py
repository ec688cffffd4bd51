"""
Duty Planner Logging
====================
One ``dutyplan`` logger tree: coloured console output, optional rotating
log file, a TRACE level below DEBUG for per-candidate decisions.
"""
import functools
import logging
import reprlib
import sys
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER_NAME = "dutyplan"

_short_repr = reprlib.Repr()
_short_repr.maxstring = 40
_short_repr.maxother = 40


class ColoredFormatter(logging.Formatter):
    """Colours the whole line by level when writing to a terminal."""

    COLORS = {"TRACE": "90", "DEBUG": "36", "INFO": "32", "WARNING": "33", "ERROR": "31", "CRITICAL": "35"}

    def __init__(self, fmt: str, datefmt: Optional[str] = None, stream=None):
        super().__init__(fmt, datefmt)
        self.use_color = bool(getattr(stream, "isatty", lambda: False)())

    def format(self, record):
        line = super().format(record)
        code = self.COLORS.get(record.levelname)
        if self.use_color and code:
            return f"\033[{code}m{line}\033[0m"
        return line


def _level(name: Optional[str], default: int = logging.INFO) -> int:
    if not name:
        return default
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_level: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the ``dutyplan`` logger. Safe to call repeatedly.

    Args:
        level: Level for the log file, and for the console unless overridden
        log_file: Rotating log file path (None = console only)
        console_level: Separate console level, e.g. ERROR to keep stdout clean
        max_bytes: File size that triggers rotation
        backup_count: Rotated files to keep

    Returns:
        The ``dutyplan`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(TRACE)  # handlers filter
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    file_level = _level(level)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(_level(console_level, file_level))
    console.setFormatter(ColoredFormatter("%(levelname)-7s %(name)s: %(message)s", stream=sys.stdout))
    logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s", "%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_function_call(func: Callable) -> Callable:
    """Trace calls of ``func``: arguments on entry, result on return, errors always."""
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if logger.isEnabledFor(TRACE):
            shown = [_short_repr.repr(a) for a in args]
            shown += [f"{k}={_short_repr.repr(v)}" for k, v in kwargs.items()]
            logger.log(TRACE, f"→ {func.__name__}({', '.join(shown)})")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{func.__name__} failed: {type(e).__name__}: {e}")
            raise
        logger.log(TRACE, f"← {func.__name__} = {_short_repr.repr(result)}")
        return result

    return wrapper


def log_constraint(logger: logging.Logger, name: str, satisfied: bool, details: str = ""):
    """DEBUG line for a rule that holds, WARNING for one that does not."""
    msg = f"[{'✓' if satisfied else '✗'}] {name}" + (f": {details}" if details else "")
    logger.log(logging.DEBUG if satisfied else logging.WARNING, msg)


class RunLogger:
    """Indented progress output for one generation run."""

    def __init__(self, name: str = "dutyplan.engine"):
        self.logger = logging.getLogger(name)
        self.depth = 0

    def phase(self, title: str):
        self.logger.info(f"== {title} ==")

    def step(self, text: str):
        self.logger.info(f"{'  ' * self.depth}▸ {text}")

    def detail(self, key: str, value: Any):
        self.logger.debug(f"{'  ' * self.depth}  {key}: {value}")

    @contextmanager
    def section(self, title: str) -> Iterator[None]:
        """Indent everything logged inside the block."""
        self.logger.debug(f"{'  ' * self.depth}┌─ {title}")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
            self.logger.debug(f"{'  ' * self.depth}└─ {title}")
