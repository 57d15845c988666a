"""
Database module - plan text retrieval
"""

from plantree.database.plan_source import (
    PlanTextSource,
    PlanTextFetcher,
    CallablePlanSource,
    SqlAlchemyPlanSource,
)

__all__ = [
    "PlanTextSource",
    "PlanTextFetcher",
    "CallablePlanSource",
    "SqlAlchemyPlanSource",
]
