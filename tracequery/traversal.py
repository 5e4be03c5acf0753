"""Breadth-first enumeration of every route from a start node.

`walk` knows nothing about targets, depth limits or costs. It extends each
queued path by every outgoing trace and hands the new path to a callback,
which decides whether that path is expanded further. The callback is solely
responsible for termination: one that always continues never returns on a
graph with a cycle reachable from the start node.
"""

from __future__ import annotations

from collections import deque
from enum import IntEnum
from typing import Callable, Deque

from tracequery.exceptions import UnknownNodeError
from tracequery.graph import TraceGraph
from tracequery.logging import get_logger
from tracequery.path import TracePath
from tracequery.types import NodeKey

logger = get_logger(__name__)


class Decision(IntEnum):
    """What `walk` should do with a path after reporting it."""

    #: Queue the path so it is extended by its outgoing traces.
    CONTINUE = 1
    #: Do not extend the path any further.
    PRUNE = 2

    @classmethod
    def of(cls, keep_going: bool) -> Decision:
        """Map a boolean condition to CONTINUE (True) or PRUNE (False)."""
        return cls.CONTINUE if keep_going else cls.PRUNE


PathHandler = Callable[[TracePath], Decision]


def walk(graph: TraceGraph, start: NodeKey, on_path: PathHandler) -> int:
    """Traverse all routes that start at `start`, shortest first.

    Paths are generated in FIFO order, and the children of each path in
    ascending destination order. The root path is never reported.

    Args:
        graph: Graph to traverse.
        start: Registered start node.
        on_path: Called with every generated path. Only paths for which it
            returns `Decision.CONTINUE` are extended further.

    Returns:
        Number of paths reported to `on_path`.

    Raises:
        UnknownNodeError: If `start` is not registered in `graph`.
    """
    if start not in graph:
        raise UnknownNodeError(start)

    queue: Deque[TracePath] = deque([TracePath.root(start)])
    reported = 0
    while queue:
        here = queue.popleft()
        for trace in graph.neighbors(here.node).values():
            child = here.extend(trace)
            reported += 1
            if on_path(child) == Decision.CONTINUE:
                queue.append(child)

    logger.debug("Walk from '%s' reported %d paths", start, reported)
    return reported
