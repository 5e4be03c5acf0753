"""TraceQuery: route queries over small directed, weighted trace graphs.

Traces are directed connections between named nodes with positive integer
costs. A frozen `TraceGraph` is built once, then queried for the cost of an
explicit route, counts of routes within depth or cost bounds, and the cost of
the cheapest route between two nodes.

Example:
    from tracequery import build_trace_graph, cheapest_path, parse_traces

    graph = build_trace_graph(parse_traces(["AB5, BC4, CD8, DC8, AD5"]))
    cheapest_path(graph, "A", "C")  # 9
"""

from __future__ import annotations

from tracequery import cli, logging
from tracequery.exceptions import (
    DuplicateEdgeError,
    InvalidCostError,
    TraceQueryError,
    UnknownNodeError,
)
from tracequery.graph import Trace, TraceGraph, build_trace_graph
from tracequery.io import line_to_traces, load_trace_graph, parse_traces
from tracequery.path import TracePath
from tracequery.plan import DEFAULT_PLAN, Query, QueryKind, load_query_plan, run_plan
from tracequery.queries import (
    cheapest_path,
    count_at_depth,
    count_returning,
    count_under_cost,
    path_cost,
)
from tracequery.report import format_result
from tracequery.traversal import Decision, walk

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "Trace",
    "TraceGraph",
    "TracePath",
    "build_trace_graph",
    # Errors
    "TraceQueryError",
    "DuplicateEdgeError",
    "InvalidCostError",
    "UnknownNodeError",
    # Traversal and queries
    "Decision",
    "walk",
    "path_cost",
    "count_returning",
    "count_at_depth",
    "count_under_cost",
    "cheapest_path",
    # Plans and I/O
    "Query",
    "QueryKind",
    "DEFAULT_PLAN",
    "load_query_plan",
    "run_plan",
    "line_to_traces",
    "parse_traces",
    "load_trace_graph",
    "format_result",
    # Utilities
    "cli",
    "logging",
]
