"""
Plan tree builder

Rebuilds the plan forest from depth-tagged plan lines in a single forward pass.
The most recent node and its ancestor chain act as the stack of open nodes:

- depth + 1   the line is a child of the previous line
- same depth  the line is a sibling of the previous line
- shallower   walk up to the ancestor at that depth; the line is its sibling
- deeper by more than one level: malformed plan text
"""

from typing import Optional, List, Iterable, Tuple, Union

from plantree.analysis.line_parser import PlanLine, PlanTextParser, LineDepthParser
from plantree.analysis.plan_node import PlanNode
from plantree.core.exceptions import MalformedPlanError
from plantree.core.logger import get_logger

logger = get_logger('analysis.plan_builder')

PlanRecord = Union[PlanLine, Tuple[int, str]]


def _as_plan_line(record: PlanRecord, position: int) -> PlanLine:
    if isinstance(record, PlanLine):
        return record
    depth, label = record
    return PlanLine(index=position, depth=depth, label=label, raw=label)


class PlanBuilder:
    """
    Builds one plan forest

    Usage:
        builder = PlanBuilder()
        roots = builder.build(parser.parse_text(plan_text))

    A builder holds the state of a single forest; use a new one per plan.
    """

    def __init__(self):
        self._roots: List[PlanNode] = []
        self._last_node: Optional[PlanNode] = None
        self._node_count = 0

    @property
    def roots(self) -> List[PlanNode]:
        return list(self._roots)

    @property
    def node_count(self) -> int:
        return self._node_count

    def _resolve_parent(self, line: PlanLine) -> Optional[PlanNode]:
        """Parent for the incoming line, None when it starts a new tree"""
        last = self._last_node

        if last is None:
            if line.depth != 0:
                raise MalformedPlanError(
                    f"First plan line must have depth 0, got {line.depth}",
                    line_index=line.index,
                    line=line.raw,
                    depth=line.depth,
                )
            return None

        previous_depth = last.depth

        if line.depth == previous_depth + 1:
            return last

        if line.depth == previous_depth:
            return last.parent

        if line.depth > previous_depth + 1:
            raise MalformedPlanError(
                f"Plan line jumps from depth {previous_depth} to {line.depth}",
                line_index=line.index,
                line=line.raw,
                depth=line.depth,
                previous_depth=previous_depth,
            )

        sibling = last.ancestor_at_depth(line.depth)
        if sibling is None:
            raise MalformedPlanError(
                f"No open plan node at depth {line.depth}",
                line_index=line.index,
                line=line.raw,
                depth=line.depth,
                previous_depth=previous_depth,
            )
        return sibling.parent

    def add(self, line: PlanLine) -> PlanNode:
        """Attach one plan line to the forest and return its node"""
        parent = self._resolve_parent(line)
        node = PlanNode(line.depth, line.label, parent)

        if parent is None:
            self._roots.append(node)

        self._last_node = node
        self._node_count += 1
        return node

    def build(self, lines: Iterable[PlanRecord]) -> List[PlanNode]:
        """
        Build the forest from plan lines

        Args:
            lines: PlanLine records or (depth, label) pairs in text order

        Returns:
            Root nodes in the order they appear

        Raises:
            MalformedPlanError: If a line's depth does not fit the lines before it
        """
        for position, record in enumerate(lines):
            line = _as_plan_line(record, position)
            try:
                self.add(line)
            except MalformedPlanError as e:
                logger.warning(f"Malformed plan at line {line.index}: {e.message}")
                raise

        logger.debug(f"Built plan forest: {len(self._roots)} root(s), {self._node_count} node(s)")
        return self.roots


def build_plan_forest(
    raw_plan_text: Optional[str],
    parser: Optional[PlanTextParser] = None,
) -> List[PlanNode]:
    """
    Build the plan forest for raw EXPLAIN PLAN text

    Args:
        raw_plan_text: Plan text as returned by the database
        parser: Line parser; defaults to LineDepthParser() with the built-in
            one-space convention (settings are never read here)

    Returns:
        Root plan nodes; empty when the text has no plan lines

    Raises:
        MalformedPlanError: If the text does not describe a well-formed tree
    """
    if not raw_plan_text:
        return []

    if parser is None:
        parser = LineDepthParser()

    return PlanBuilder().build(parser.parse_text(raw_plan_text))
