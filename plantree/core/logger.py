"""
Logging configuration for Plan Tree

Console records go to stderr by default so stdout stays free for command output.
"""

import sys
import logging
from pathlib import Path
from typing import Optional, TextIO
from logging.handlers import TimedRotatingFileHandler
from datetime import datetime

from plantree.core.constants import APP_NAME, LOG_FILE

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s"


class ColoredFormatter(logging.Formatter):
    """Level-coloured formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, stream: TextIO, fmt: Optional[str] = None,
                 datefmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)
        # Colour a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class PlanTreeLogger:
    """Application logger with console and optional file handlers"""

    _instance: Optional['PlanTreeLogger'] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.logger = logging.getLogger(APP_NAME)
        self.logger.setLevel(logging.DEBUG)
        self._initialized = True

    def _reset_handlers(self) -> None:
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def setup(
        self,
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        file_enabled: bool = True,
        retention_days: int = 7,
        console_colors: bool = True,
        stream: Optional[TextIO] = None,
    ) -> logging.Logger:
        """
        Configure logging with console and file handlers

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files
            file_enabled: Enable file logging
            retention_days: Number of daily rotated log files to keep
            console_colors: Use colored output in console
            stream: Console stream, stderr when not given

        Returns:
            Configured logger instance
        """
        self._reset_handlers()

        log_level = getattr(logging, level.upper(), logging.INFO)
        self.logger.setLevel(log_level)

        stream = stream if stream is not None else sys.stderr
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ColoredFormatter(
            stream,
            fmt=CONSOLE_FORMAT,
            datefmt="%H:%M:%S",
            use_colors=console_colors,
        ))
        self.logger.addHandler(console_handler)

        if file_enabled and log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = TimedRotatingFileHandler(
                log_dir / LOG_FILE,
                when='midnight',
                interval=1,
                backupCount=max(1, retention_days),
                encoding='utf-8'
            )
            file_handler.suffix = "%Y-%m-%d"
            file_handler.setLevel(logging.DEBUG)  # File gets all levels
            file_handler.setFormatter(logging.Formatter(
                fmt=FILE_FORMAT,
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            self.logger.addHandler(file_handler)

        return self.logger

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get a child logger with optional name"""
        if name:
            return self.logger.getChild(name)
        return self.logger


_app_logger: Optional[PlanTreeLogger] = None


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    file_enabled: bool = True,
    retention_days: int = 7,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Setup application logging

    This should be called once at application startup.
    """
    global _app_logger
    _app_logger = PlanTreeLogger()
    return _app_logger.setup(
        level=level,
        log_dir=log_dir,
        file_enabled=file_enabled,
        retention_days=retention_days,
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance

    Args:
        name: Optional name for child logger (e.g., 'analysis', 'database')

    Example:
        >>> logger = get_logger('analysis.plan_builder')
        >>> logger.info('Built plan forest')
    """
    global _app_logger
    if _app_logger is None:
        _app_logger = PlanTreeLogger()
        _app_logger.setup()

    return _app_logger.get_logger(name)


class LogContext:
    """
    Context manager for logging operation timing

    Example:
        >>> with LogContext(logger, "Explaining query"):
        ...     plan.explain(session)
        # Logs: "Explaining query... started"
        # Logs: "Explaining query... completed in 0.05s"
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: Optional[datetime] = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.log(self.level, f"{self.operation}... started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = (datetime.now() - self.start_time).total_seconds()

        if exc_type is not None:
            self.logger.error(f"{self.operation}... failed after {duration:.2f}s: {exc_val}")
        else:
            self.logger.log(self.level, f"{self.operation}... completed in {duration:.2f}s")

        return False  # Don't suppress exceptions
