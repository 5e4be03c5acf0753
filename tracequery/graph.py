"""Immutable directed trace graph.

`TraceGraph` extends `networkx.DiGraph` with the rules the traversal queries
rely on:

  - Every endpoint of every trace is a registered node, including nodes that
    only receive traces.
  - At most one trace per ordered pair of nodes; a second one raises
    `DuplicateEdgeError` instead of overwriting the first.
  - Every trace cost is a strictly positive integer (`InvalidCostError`
    otherwise). Cost-bounded traversals only terminate because of this.
  - Graphs built with `TraceGraph.from_traces` are frozen; any further
    mutation raises `networkx.NetworkXError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx

from tracequery.exceptions import DuplicateEdgeError, InvalidCostError, UnknownNodeError
from tracequery.logging import get_logger
from tracequery.types import Cost, NodeKey

logger = get_logger(__name__)


@dataclass(frozen=True)
class Trace:
    """A directed, positively weighted connection between two nodes."""

    source: NodeKey
    target: NodeKey
    cost: Cost

    def __str__(self) -> str:
        return f"{self.source}{self.target}{self.cost}"


def _check_cost(source: NodeKey, target: NodeKey, cost: Any) -> None:
    # bool is an int subclass, but True is not a cost
    if isinstance(cost, bool) or not isinstance(cost, int) or cost <= 0:
        raise InvalidCostError(source, target, cost)


class TraceGraph(nx.DiGraph):
    """Directed graph holding at most one `Trace` per ordered node pair.

    Each edge stores the `Trace` under the ``trace`` attribute and its cost
    under ``cost``, so standard networkx algorithms can use ``weight="cost"``.
    """

    def _check_mutable(self) -> None:
        if nx.is_frozen(self):
            raise nx.NetworkXError("Frozen graph can't be modified")

    def ensure_node(self, node: NodeKey) -> None:
        """Register `node` if it is not registered yet."""
        self._check_mutable()
        if node not in self:
            super().add_node(node)

    def add_trace(self, trace: Trace) -> None:
        """Add a trace between two registered nodes.

        Args:
            trace: The trace to add.

        Raises:
            InvalidCostError: If the cost is not a positive integer.
            UnknownNodeError: If either endpoint is not registered.
            DuplicateEdgeError: If the ordered pair already has a trace.
        """
        self._check_mutable()
        _check_cost(trace.source, trace.target, trace.cost)
        if trace.source not in self:
            raise UnknownNodeError(trace.source)
        if trace.target not in self:
            raise UnknownNodeError(trace.target)
        if self.has_edge(trace.source, trace.target):
            raise DuplicateEdgeError(trace.source, trace.target)
        super().add_edge(trace.source, trace.target, trace=trace, cost=trace.cost)

    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, u_of_edge: NodeKey, v_of_edge: NodeKey, **attr: Any
    ) -> None:
        """Add a trace through the networkx edge API.

        Unlike `networkx.DiGraph`, this registers missing endpoints explicitly
        and applies the same validation as `add_trace`. A ``cost`` attribute
        is required. A ``trace`` attribute, as found in copied edge data, must
        match the endpoints and cost. No other attributes are accepted.
        """
        unexpected = set(attr) - {"cost", "trace"}
        if unexpected:
            raise ValueError(f"Unsupported trace attributes: {sorted(unexpected)}")
        trace = Trace(u_of_edge, v_of_edge, attr.get("cost"))
        if "trace" in attr and attr["trace"] != trace:
            raise ValueError(f"Trace attribute {attr['trace']!r} does not match {trace}")
        self.ensure_node(u_of_edge)
        self.ensure_node(v_of_edge)
        self.add_trace(trace)

    def add_edges_from(self, ebunch_to_add: Iterable[Tuple], **attr: Any) -> None:
        """Add traces from ``(u, v)`` or ``(u, v, data)`` tuples via `add_edge`.

        Per-edge data overrides `attr`, as in networkx.
        """
        for edge in ebunch_to_add:
            if len(edge) == 3:
                u, v, data = edge
            elif len(edge) == 2:
                (u, v), data = edge, {}
            else:
                raise nx.NetworkXError(f"Edge tuple {edge} must be a 2-tuple or 3-tuple.")
            self.add_edge(u, v, **{**attr, **data})

    def add_weighted_edges_from(
        self, ebunch_to_add: Iterable[Tuple], weight: str = "cost", **attr: Any
    ) -> None:
        """Add ``(u, v, cost)`` traces via `add_edge`; `weight` must be ``"cost"``."""
        self.add_edges_from(
            ((u, v, {weight: w}) for u, v, w in ebunch_to_add), **attr
        )

    @classmethod
    def from_traces(cls, traces: Iterable[Trace]) -> TraceGraph:
        """Build a frozen graph from a stream of traces.

        Args:
            traces: Traces in input order.

        Returns:
            A frozen TraceGraph.

        Raises:
            InvalidCostError: If any trace has a non-positive or non-integer cost.
            DuplicateEdgeError: If two traces share an ordered pair.
        """
        graph = cls()
        for trace in traces:
            graph.ensure_node(trace.source)
            graph.ensure_node(trace.target)
            graph.add_trace(trace)
        nx.freeze(graph)
        logger.debug(
            "Built trace graph with %d nodes and %d traces",
            graph.number_of_nodes(),
            graph.number_of_edges(),
        )
        return graph

    def neighbors(self, node: NodeKey) -> Dict[NodeKey, Trace]:  # type: ignore[override]
        """Return outgoing traces of `node` keyed by destination.

        Destinations are ordered by ascending key so that traversals are
        reproducible. Iterating the result yields destination nodes, as
        `networkx.DiGraph.neighbors` does.

        Raises:
            UnknownNodeError: If `node` is not registered. A registered node
                without outgoing traces yields an empty dict.
        """
        try:
            succ = self._succ[node]
        except KeyError:
            raise UnknownNodeError(node) from None
        return {target: succ[target]["trace"] for target in sorted(succ)}

    def edge_cost(self, source: NodeKey, target: NodeKey) -> Optional[Cost]:
        """Return the cost of the trace from `source` to `target`, if any."""
        data = self._succ.get(source, {}).get(target)
        if data is None:
            return None
        return data["cost"]

    def traces(self) -> List[Trace]:
        """Return all traces, grouped by source in node registration order."""
        return [data["trace"] for _, _, data in self.edges(data=True)]


def build_trace_graph(traces: Iterable[Trace]) -> TraceGraph:
    """Build a frozen `TraceGraph` from `traces`."""
    return TraceGraph.from_traces(traces)


def neighbors(graph: TraceGraph, node: NodeKey) -> Dict[NodeKey, Trace]:
    return graph.neighbors(node)


def edge_cost(graph: TraceGraph, source: NodeKey, target: NodeKey) -> Optional[Cost]:
    return graph.edge_cost(source, target)
