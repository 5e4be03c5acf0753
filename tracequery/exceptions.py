"""Error types raised while building trace graphs and running queries.

Absent answers (no such route, target never reached) are returned as ``None``
and are not errors. The exceptions below signal malformed input instead.
"""

from __future__ import annotations

from typing import Any, Hashable


class TraceQueryError(Exception):
    """Base class for all TraceQuery errors."""


class DuplicateEdgeError(TraceQueryError, ValueError):
    """A second trace was supplied for an ordered pair that already has one."""

    def __init__(self, source: Hashable, target: Hashable) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Trace from '{source}' to '{target}' already exists.")


class InvalidCostError(TraceQueryError, ValueError):
    """A trace cost is not a strictly positive integer."""

    def __init__(self, source: Hashable, target: Hashable, cost: Any) -> None:
        self.source = source
        self.target = target
        self.cost = cost
        super().__init__(
            f"Trace from '{source}' to '{target}' has invalid cost {cost!r}; "
            "costs must be positive integers."
        )


class UnknownNodeError(TraceQueryError, KeyError):
    """A query referenced a node that is not registered in the graph."""

    def __init__(self, node: Hashable) -> None:
        self.node = node
        super().__init__(node)

    def __str__(self) -> str:
        return f"Node '{self.node}' does not exist."
