"""
Execution plan node

One node per plan step. The parent owns its children; the child keeps a plain
back-reference to the parent for upward traversal.
"""

from typing import Optional, List, Iterator, Tuple, Iterable

from plantree.core.constants import PLAN_NODE_TYPE
from plantree.core.exceptions import InvalidPlanNodeError


class PlanNode:
    """
    Execution plan step

    depth, label and parent are fixed at construction. Children are appended
    by the builder in the order their lines appear in the plan text.
    """

    node_type: str = PLAN_NODE_TYPE

    def __init__(self, depth: int, label: str, parent: Optional['PlanNode'] = None):
        if parent is None:
            if depth != 0:
                raise InvalidPlanNodeError(
                    f"Root plan node must have depth 0, got {depth}", depth=depth
                )
        elif depth != parent.depth + 1:
            raise InvalidPlanNodeError(
                f"Plan node depth {depth} does not fit under parent at depth {parent.depth}",
                depth=depth,
                parent_depth=parent.depth,
            )

        self._depth = depth
        self._label = label
        self._parent = parent
        self._children: List['PlanNode'] = []

        if parent is not None:
            parent._children.append(self)

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def label(self) -> str:
        return self._label

    @property
    def parent(self) -> Optional['PlanNode']:
        return self._parent

    @property
    def children(self) -> Tuple['PlanNode', ...]:
        return tuple(self._children)

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def ancestor_at_depth(self, depth: int) -> Optional['PlanNode']:
        """Walk up the parent chain to the node at the given depth (self included)"""
        node: Optional[PlanNode] = self
        while node is not None and node.depth > depth:
            node = node.parent
        if node is None or node.depth != depth:
            return None
        return node

    def iter_nodes(self) -> Iterator['PlanNode']:
        """Pre-order traversal of this subtree"""
        stack: List[PlanNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def get_all_nodes(self) -> List['PlanNode']:
        """All nodes of this subtree as a flat list"""
        return list(self.iter_nodes())

    def flatten(self) -> List[Tuple[int, str]]:
        """(depth, label) pairs of this subtree in pre-order"""
        return [(node.depth, node.label) for node in self.iter_nodes()]

    def to_debug_string(self) -> str:
        """Indented dump of this subtree, one line per node"""
        return "".join(
            f"[depth:{node.depth:3d}] {'-' * node.depth}{node.label}\n"
            for node in self.iter_nodes()
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlanNode):
            return NotImplemented
        return self.flatten() == other.flatten()

    __hash__ = None  # mutable children

    def __repr__(self) -> str:
        return f"PlanNode(depth={self._depth}, label={self._label!r}, children={len(self._children)})"

    def __str__(self) -> str:
        return self._label


def iter_forest(roots: Iterable[PlanNode]) -> Iterator[PlanNode]:
    """Pre-order traversal over every tree of a forest"""
    for root in roots:
        yield from root.iter_nodes()


def flatten_forest(roots: Iterable[PlanNode]) -> List[Tuple[int, str]]:
    """(depth, label) pairs of a whole forest in pre-order"""
    return [(node.depth, node.label) for node in iter_forest(roots)]


def format_plan_forest(roots: Iterable[PlanNode]) -> str:
    """Debug rendering of a forest"""
    return "".join(root.to_debug_string() for root in roots)
