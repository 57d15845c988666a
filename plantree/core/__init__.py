"""
Core module - Configuration, constants, exceptions, and logging

Provides:
- Settings/Config management
- Custom exceptions
- Logging
"""

from plantree.core.config import (
    Settings,
    PlanParserSettings,
    DatabaseSettings,
    LoggingSettings,
    get_settings,
    reset_settings,
    update_settings,
)
from plantree.core.exceptions import (
    PlanTreeError,
    ConfigurationError,
    ExecutionPlanError,
    PlanParseError,
    MalformedPlanError,
    InvalidPlanNodeError,
    DatabaseError,
    PlanFetchError,
)
from plantree.core.logger import setup_logging, get_logger, LogContext

__all__ = [
    # Config
    "Settings",
    "PlanParserSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "get_settings",
    "reset_settings",
    "update_settings",
    # Exceptions
    "PlanTreeError",
    "ConfigurationError",
    "ExecutionPlanError",
    "PlanParseError",
    "MalformedPlanError",
    "InvalidPlanNodeError",
    "DatabaseError",
    "PlanFetchError",
    # Logging
    "setup_logging",
    "get_logger",
    "LogContext",
]
