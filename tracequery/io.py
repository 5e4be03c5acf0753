"""Reading trace graphs from the compact edge-list notation.

Input is free-form text containing tokens such as ``AB5``: a source node
letter, a target node letter and a positive integer cost. Tokens may be
separated by commas, whitespace or line breaks; everything between tokens
is ignored.

Example:
    AB5, BC4, CD8, DC8, DE6, AD5, CE2, EB3, AE7
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Iterator, List, TextIO

from tracequery.config import CONFIG
from tracequery.graph import Trace, TraceGraph
from tracequery.logging import get_logger

logger = get_logger(__name__)

TRACE_PATTERN = re.compile(CONFIG.trace_pattern)


def line_to_traces(line: str) -> Iterator[Trace]:
    """Yield every trace token found in `line`, in order."""
    for match in TRACE_PATTERN.finditer(line):
        source, target, cost = match.groups()
        yield Trace(source, target, int(cost))


def parse_traces(lines: Iterable[str]) -> List[Trace]:
    """Return all traces found in `lines`, preserving input order."""
    return [trace for line in lines for trace in line_to_traces(line)]


def load_trace_graph(stream: TextIO) -> TraceGraph:
    """Build a frozen `TraceGraph` from a text stream.

    Args:
        stream: Readable text stream with edge-list notation.

    Returns:
        The graph. It is empty if the stream holds no trace tokens.

    Raises:
        InvalidCostError: If a token has a zero cost.
        DuplicateEdgeError: If an ordered pair appears twice.
    """
    traces = parse_traces(stream)
    logger.debug("Parsed %d traces", len(traces))
    return TraceGraph.from_traces(traces)


def graph_to_dict(graph: TraceGraph) -> Dict[str, Any]:
    """Convert a graph into a node-link dict suitable for JSON serialization.

    Returns:
        ``{"nodes": [...], "links": [...]}`` where each link references its
        endpoints by position in ``nodes`` and carries the trace cost.
    """
    node_list = list(graph.nodes)
    node_map = {node: i for i, node in enumerate(node_list)}
    return {
        "nodes": [{"id": node} for node in node_list],
        "links": [
            {
                "source": node_map[trace.source],
                "target": node_map[trace.target],
                "cost": trace.cost,
            }
            for trace in graph.traces()
        ],
    }
