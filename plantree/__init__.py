"""
Plan Tree - execution plan tree reconstruction

Turns indented EXPLAIN PLAN text into a forest of plan nodes.
"""

from plantree.core.constants import APP_NAME, APP_VERSION
from plantree.analysis import (
    PlanNode,
    PlanLine,
    LineDepthParser,
    PlanBuilder,
    ExecutionPlan,
    build_plan_forest,
    format_plan_forest,
)
from plantree.core.exceptions import MalformedPlanError, PlanFetchError

__version__ = APP_VERSION
__app_name__ = APP_NAME

__all__ = [
    "PlanNode",
    "PlanLine",
    "LineDepthParser",
    "PlanBuilder",
    "ExecutionPlan",
    "build_plan_forest",
    "format_plan_forest",
    "MalformedPlanError",
    "PlanFetchError",
]
