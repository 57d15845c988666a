"""
Analysis Module - execution plan text parsing and plan trees
"""

from plantree.analysis.plan_node import PlanNode, iter_forest, flatten_forest, format_plan_forest
from plantree.analysis.line_parser import PlanLine, PlanTextParser, LineDepthParser
from plantree.analysis.plan_builder import PlanBuilder, build_plan_forest
from plantree.analysis.execution_plan import ExecutionPlan

__all__ = [
    "PlanNode",
    "iter_forest",
    "flatten_forest",
    "format_plan_forest",
    "PlanLine",
    "PlanTextParser",
    "LineDepthParser",
    "PlanBuilder",
    "build_plan_forest",
    "ExecutionPlan",
]
