"""Shared-prefix route records produced during traversal.

A `TracePath` holds a reference to the path it extends rather than a copy of
the route, so every child of a path shares its prefix. The node sequence is
rebuilt on demand by walking back to the root; traversal queries only look
at the last node, the depth and the cumulative cost.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from tracequery.graph import Trace
from tracequery.types import Cost, NodeKey


@dataclass(frozen=True, eq=False, repr=False)
class TracePath:
    """Immutable route taken so far from a traversal start node.

    Attributes:
        prior: Path this one extends, or None for a root path.
        node: Last node of the route.
        depth: Number of traces traversed.
        cost: Sum of the traversed trace costs.
    """

    prior: Optional[TracePath]
    node: NodeKey
    depth: int = 0
    cost: Cost = 0

    @classmethod
    def root(cls, node: NodeKey) -> TracePath:
        """Return the zero-length path starting (and ending) at `node`."""
        return cls(None, node, 0, 0)

    def extend(self, trace: Trace) -> TracePath:
        """Return a new path that follows `trace` from this path's last node.

        Raises:
            ValueError: If `trace` does not start at this path's last node, or
                its cost is not positive. Both indicate a caller bug.
        """
        if trace.source != self.node:
            raise ValueError(
                f"Trace {trace} does not start at path end node '{self.node}'."
            )
        if trace.cost <= 0:
            raise ValueError(f"Trace {trace} has non-positive cost.")
        return TracePath(self, trace.target, self.depth + 1, self.cost + trace.cost)

    def to_sequence(self) -> Tuple[NodeKey, ...]:
        """Return the nodes of this path from the root, root included."""
        nodes: List[NodeKey] = []
        here: Optional[TracePath] = self
        while here is not None:
            nodes.append(here.node)
            here = here.prior
        nodes.reverse()
        return tuple(nodes)

    @property
    def src_node(self) -> NodeKey:
        here = self
        while here.prior is not None:
            here = here.prior
        return here.node

    @property
    def dst_node(self) -> NodeKey:
        return self.node

    def __repr__(self) -> str:
        route = "-".join(str(node) for node in self.to_sequence())
        return f"TracePath({route}, depth={self.depth}, cost={self.cost})"


def new_trace_path(node: NodeKey) -> TracePath:
    return TracePath.root(node)
