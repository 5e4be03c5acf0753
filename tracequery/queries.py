"""Route queries over a `TraceGraph`.

Apart from `path_cost`, every query drives `walk` with a callback that keeps
its own counters and decides where the search stops. Each bound relies on
trace costs being positive integers and depth growing by one per trace, so
every branch eventually exceeds it even on cyclic graphs.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from tracequery.exceptions import UnknownNodeError
from tracequery.graph import TraceGraph
from tracequery.logging import get_logger
from tracequery.path import TracePath
from tracequery.traversal import Decision, walk
from tracequery.types import Cost, NodeKey

logger = get_logger(__name__)


def _require_node(graph: TraceGraph, node: NodeKey) -> None:
    if node not in graph:
        raise UnknownNodeError(node)


def path_cost(graph: TraceGraph, route: Sequence[NodeKey]) -> Optional[Cost]:
    """Return the cost of following `route` exactly.

    An empty route costs 0. A single-node route costs 0 if the node is
    registered. Otherwise the result is the sum of the direct traces between
    consecutive nodes, or None if any of them is missing.
    """
    if not route:
        return 0
    if len(route) == 1:
        return 0 if route[0] in graph else None

    total = 0
    for a, b in zip(route, route[1:]):
        cost = graph.edge_cost(a, b)
        if cost is None:
            return None
        total += cost
    return total


def count_returning(graph: TraceGraph, start: NodeKey, max_depth: int) -> int:
    """Count routes from `start` back to `start` with 1 to `max_depth` traces."""
    _require_node(graph, start)
    count = 0

    def on_path(path: TracePath) -> Decision:
        nonlocal count
        if path.depth > max_depth:
            return Decision.PRUNE
        if path.node == start:
            count += 1
        return Decision.CONTINUE

    walk(graph, start, on_path)
    logger.debug(
        "Routes %s->%s with at most %d traces: %d", start, start, max_depth, count
    )
    return count


def count_at_depth(
    graph: TraceGraph, start: NodeKey, target: NodeKey, depth: int
) -> int:
    """Count routes from `start` to `target` with exactly `depth` traces."""
    _require_node(graph, start)
    _require_node(graph, target)
    if depth < 1:
        return 0
    count = 0

    def on_path(path: TracePath) -> Decision:
        nonlocal count
        if path.depth < depth:
            return Decision.CONTINUE
        if path.node == target:
            count += 1
        return Decision.PRUNE

    walk(graph, start, on_path)
    logger.debug(
        "Routes %s->%s with exactly %d traces: %d", start, target, depth, count
    )
    return count


def count_under_cost(
    graph: TraceGraph, start: NodeKey, target: NodeKey, cost_limit: Cost
) -> int:
    """Count distinct routes from `start` to `target` costing less than `cost_limit`.

    Routes are counted individually: a route and its extension through a
    cycle back to `target` are two routes.
    """
    _require_node(graph, start)
    _require_node(graph, target)
    count = 0

    def on_path(path: TracePath) -> Decision:
        nonlocal count
        if path.cost >= cost_limit:
            return Decision.PRUNE
        if path.node == target:
            count += 1
        return Decision.CONTINUE

    walk(graph, start, on_path)
    logger.debug(
        "Routes %s->%s costing less than %d: %d", start, target, cost_limit, count
    )
    return count


def cheapest_path(
    graph: TraceGraph, source: NodeKey, target: NodeKey
) -> Optional[Cost]:
    """Return the cost of the cheapest non-empty route from `source` to `target`.

    When `source == target` this is the cheapest cycle through `source`.
    Returns None if `target` is unreachable.

    A path is pruned when its node was already reached at the same or a
    lower cost, when it is no cheaper than the best answer so far, or when
    it reaches `target`.
    """
    _require_node(graph, source)
    _require_node(graph, target)
    best_seen: Dict[NodeKey, Cost] = {}
    best: Optional[Cost] = None

    def on_path(path: TracePath) -> Decision:
        nonlocal best
        seen = best_seen.get(path.node)
        if seen is not None and seen <= path.cost:
            return Decision.PRUNE
        best_seen[path.node] = path.cost

        if best is not None and best <= path.cost:
            return Decision.PRUNE
        if path.node == target:
            best = path.cost
            return Decision.PRUNE
        return Decision.CONTINUE

    walk(graph, source, on_path)
    logger.debug("Cheapest route %s->%s: %s", source, target, best)
    return best
