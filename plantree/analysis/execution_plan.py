"""
Execution plan facade

Fetches the plan text of a query through a plan text source and turns it into
a forest of plan nodes.
"""

from typing import Any, Optional, List, Union

from plantree.analysis.line_parser import PlanTextParser
from plantree.analysis.plan_builder import build_plan_forest
from plantree.analysis.plan_node import PlanNode, iter_forest, format_plan_forest
from plantree.core.exceptions import PlanTreeError, PlanFetchError
from plantree.core.logger import get_logger, LogContext
from plantree.database.plan_source import PlanTextSource, PlanTextFetcher, CallablePlanSource

logger = get_logger('analysis.execution_plan')


class ExecutionPlan:
    """
    Explained query plan

    Usage:
        plan = ExecutionPlan("SELECT * FROM t1", SqlAlchemyPlanSource())
        with engine.connect() as conn:
            roots = plan.explain(conn)

        print(plan.to_debug_string())
    """

    def __init__(
        self,
        query: str,
        source: Union[PlanTextSource, PlanTextFetcher],
        parser: Optional[PlanTextParser] = None,
    ):
        self._query = query
        if isinstance(source, PlanTextSource):
            self._source = source
        else:
            self._source = CallablePlanSource(source)
        self._parser = parser
        self._plan_text: Optional[str] = None
        self._root_nodes: List[PlanNode] = []

    @property
    def query_string(self) -> str:
        return self._query

    @property
    def plan_text(self) -> Optional[str]:
        """Raw plan text from the last explain, None before explain"""
        return self._plan_text

    @property
    def is_explained(self) -> bool:
        return self._plan_text is not None

    @property
    def node_count(self) -> int:
        return sum(1 for _ in iter_forest(self._root_nodes))

    def explain(self, session: Any) -> List[PlanNode]:
        """
        Fetch and build the plan

        Args:
            session: Open database session handed to the plan text source

        Returns:
            Root plan nodes

        Raises:
            PlanFetchError: If the plan text cannot be obtained
            MalformedPlanError: If the plan text is not a well-formed tree
        """
        with LogContext(logger, "Explaining query"):
            try:
                plan_text = self._source.fetch_plan_text(session, self._query)
            except PlanTreeError:
                raise
            except Exception as e:
                raise PlanFetchError(f"Plan text source failed: {e}", query=self._query) from e

            roots = build_plan_forest(plan_text, self._parser)

        self._plan_text = plan_text or ""
        self._root_nodes = roots
        logger.info(f"Explained query: {len(roots)} root(s), {self.node_count} node(s)")
        return list(roots)

    def get_plan_nodes(self) -> List[PlanNode]:
        """Root plan nodes from the last explain"""
        return list(self._root_nodes)

    def to_debug_string(self) -> str:
        return format_plan_forest(self._root_nodes)
