"""
Logging helpers shared by the whole package.

Every module obtains its logger through :class:`PlannerLogger` so that a single
process-wide verbosity level (QUIET, NORMAL, VERBOSE, DEBUG) controls what is
printed.  The level can be set programmatically, from CLI flags, or through the
``MILKPLAN_LOG_LEVEL`` environment variable.
"""

import logging
import os
import sys
from enum import Enum

LOG_LEVEL_ENV = "MILKPLAN_LOG_LEVEL"
EFFECTIVE_LOG_LEVEL_ENV = "MILKPLAN_EFFECTIVE_LOG_LEVEL"


class LogLevel(Enum):
    """Verbosity levels understood by the planner."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


_STDLIB_LEVELS = {
    LogLevel.QUIET: logging.ERROR,
    LogLevel.NORMAL: logging.INFO,
    LogLevel.VERBOSE: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


class Colors:
    """ANSI color codes for terminal output."""

    BLUE = "\033[34m"
    GREEN = "\033[32m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    GRAY = "\033[37m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class Symbols:
    """Unicode symbols for logging."""

    CHECK = "✓"
    CROSS = "✗"
    GEAR = "⚙"
    WARNING = "⚠"


class SimpleFormatter(logging.Formatter):
    """Colour the whole message according to its level."""

    COLORS = {
        logging.DEBUG: Colors.GRAY,
        logging.INFO: Colors.CYAN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.RED + Colors.BOLD,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, Colors.RESET)
        return f"{color}{record.getMessage()}{Colors.RESET}"


class PlannerLogger:
    """Process-wide logger factory with a shared verbosity level."""

    _current_level: LogLevel = LogLevel.NORMAL
    _loggers: dict[str, logging.Logger] = {}

    @classmethod
    def set_level(cls, level: LogLevel) -> None:
        cls._current_level = level
        for logger in cls._loggers.values():
            cls._configure_logger(logger)

    @classmethod
    def get_level(cls) -> LogLevel:
        return cls._current_level

    @classmethod
    def _effective_level(cls) -> LogLevel:
        # A level exported by setup_logging wins so that worker processes
        # spawned by joblib inherit the parent's verbosity.
        env_level = os.environ.get(EFFECTIVE_LOG_LEVEL_ENV)
        if env_level and env_level.upper() in LogLevel.__members__:
            return LogLevel[env_level.upper()]
        return cls._current_level

    @classmethod
    def _configure_logger(cls, logger: logging.Logger) -> None:
        logger.setLevel(_STDLIB_LEVELS[cls._effective_level()])

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Return a cached logger configured for the current level."""
        if name not in cls._loggers:
            cls._loggers[name] = logging.getLogger(name)
        logger = cls._loggers[name]
        cls._configure_logger(logger)
        return logger

    @classmethod
    def progress(cls, message: str) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("milkplan").info(f"{Symbols.GEAR} {message}")

    @classmethod
    def success(cls, message: str) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("milkplan").info(
                f"{Colors.GREEN}{Symbols.CHECK} {message}{Colors.RESET}"
            )

    @classmethod
    def detail(cls, message: str) -> None:
        """Only shown in VERBOSE mode or above."""
        if cls._current_level.value >= LogLevel.VERBOSE.value:
            cls.get_logger("milkplan").info(f"  {message}")

    @classmethod
    def debug(cls, message: str) -> None:
        if cls._current_level.value >= LogLevel.DEBUG.value:
            cls.get_logger("milkplan").debug(message)

    @classmethod
    def warning(cls, message: str) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("milkplan").warning(f"{Symbols.WARNING} {message}")

    @classmethod
    def error(cls, message: str) -> None:
        # Errors are shown at every level, QUIET included.
        cls.get_logger("milkplan").error(f"{Symbols.CROSS} {message}")


def suppress_third_party_logs() -> None:
    """Keep chatty dependencies at WARNING and above."""
    for name in ("joblib", "loky", "urllib3", "asyncio", "markdown_it"):
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(level: LogLevel | None = None) -> None:
    """Configure the root handler and the package-wide verbosity.

    When ``level`` is omitted the ``MILKPLAN_LOG_LEVEL`` environment variable is
    consulted, falling back to NORMAL.
    """
    if level is None:
        env_value = os.environ.get(LOG_LEVEL_ENV, "").upper()
        level = LogLevel[env_value] if env_value in LogLevel.__members__ else LogLevel.NORMAL

    os.environ[EFFECTIVE_LOG_LEVEL_ENV] = level.name

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SimpleFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(_STDLIB_LEVELS[level])

    PlannerLogger.set_level(level)
    suppress_third_party_logs()


def log_progress(message: str) -> None:
    PlannerLogger.progress(message)


def log_success(message: str) -> None:
    PlannerLogger.success(message)


def log_detail(message: str) -> None:
    PlannerLogger.detail(message)


def log_debug(message: str) -> None:
    PlannerLogger.debug(message)


def log_warning(message: str) -> None:
    PlannerLogger.warning(message)


def log_error(message: str) -> None:
    PlannerLogger.error(message)
