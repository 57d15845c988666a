"""
Custom exceptions for Plan Tree
"""

from typing import Optional, Any


class PlanTreeError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PlanTreeError):
    """Configuration related errors"""
    pass


# =============================================================================
# Execution Plan Errors
# =============================================================================


class ExecutionPlanError(PlanTreeError):
    """Failed to build or analyze an execution plan"""
    pass


class PlanParseError(ExecutionPlanError):
    """Raw plan text could not be turned into a plan tree"""
    pass


class MalformedPlanError(PlanParseError):
    """A line's depth cannot be reconciled with the lines before it"""

    def __init__(
        self,
        message: str,
        line_index: Optional[int] = None,
        line: Optional[str] = None,
        depth: Optional[int] = None,
        previous_depth: Optional[int] = None,
        **kwargs
    ):
        details = {
            "line_index": line_index,
            "line": line,
            "depth": depth,
            "previous_depth": previous_depth,
            **kwargs
        }
        super().__init__(message, details)
        self.line_index = line_index
        self.line = line
        self.depth = depth
        self.previous_depth = previous_depth


class InvalidPlanNodeError(ExecutionPlanError):
    """Plan node constructed with a depth that does not fit its parent"""

    def __init__(self, message: str, depth: int, parent_depth: Optional[int] = None):
        super().__init__(message, {"depth": depth, "parent_depth": parent_depth})
        self.depth = depth
        self.parent_depth = parent_depth


# =============================================================================
# Database Errors
# =============================================================================


class DatabaseError(PlanTreeError):
    """Base database error"""
    pass


class PlanFetchError(DatabaseError):
    """Plan text could not be obtained from the database"""

    def __init__(self, message: str, query: Optional[str] = None, **kwargs):
        details = {"query": query[:500] if query else None, **kwargs}
        super().__init__(message, details)
        self.query = query
