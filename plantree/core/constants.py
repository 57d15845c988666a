"""
Application constants and enumerations
"""

from enum import Enum
from typing import Final

# =============================================================================
# Application Info
# =============================================================================

APP_NAME: Final[str] = "Plan Tree"
APP_VERSION: Final[str] = "1.0.0"

# =============================================================================
# File Paths
# =============================================================================

CONFIG_FILE: Final[str] = "settings.json"
LOG_FILE: Final[str] = "plantree.log"

# =============================================================================
# Plan Text Format
# =============================================================================

# Altibase EXPLAIN PLAN output indents each nested step by one space
DEFAULT_INDENT_CHAR: Final[str] = " "
DEFAULT_INDENT_WIDTH: Final[int] = 1
DEFAULT_TAB_SIZE: Final[int] = 4

# Ruler lines framing the plan output carry no plan step
DEFAULT_SKIP_PATTERNS: Final[tuple[str, ...]] = (
    r"^-{3,}$",
    r"^={3,}$",
)

PLAN_NODE_TYPE: Final[str] = "Plan"

# =============================================================================
# Database Constants
# =============================================================================

DEFAULT_EXPLAIN_PREFIX: Final[str] = "EXPLAIN PLAN FOR "
DEFAULT_PLAN_COLUMN: Final[int] = 0

# =============================================================================
# Enumerations
# =============================================================================


class LogLevel(str, Enum):
    """Supported logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
