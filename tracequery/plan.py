"""Query plans: ordered lists of named queries loaded from YAML.

A plan file looks like::

    queries:
      - type: path_cost
        route: A-B-C
      - type: count_returning
        start: C
        max_depth: 3
      - name: cheapest A to C
        type: cheapest_path
        source: A
        target: C

Without a plan file, the CLI runs `DEFAULT_PLAN`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from tracequery.graph import TraceGraph
from tracequery.logging import get_logger
from tracequery.queries import (
    cheapest_path,
    count_at_depth,
    count_returning,
    count_under_cost,
    path_cost,
)

logger = get_logger(__name__)


class QueryKind(IntEnum):
    """Supported query types."""

    PATH_COST = 1
    COUNT_RETURNING = 2
    COUNT_AT_DEPTH = 3
    COUNT_UNDER_COST = 4
    CHEAPEST_PATH = 5

    @classmethod
    def from_string(cls, value: str) -> QueryKind:
        """Parse a case-insensitive query type name (e.g. ``"path_cost"``).

        Raises:
            ValueError: If the string doesn't match any query type.
        """
        try:
            return cls[value.upper()]
        except KeyError:
            valid = ", ".join(e.name.lower() for e in cls)
            raise ValueError(
                f"Invalid query type '{value}'. Valid values are: {valid}"
            ) from None


# Parameters each query type takes, and which of them are node keys
_PARAMS: Dict[QueryKind, Tuple[str, ...]] = {
    QueryKind.PATH_COST: ("route",),
    QueryKind.COUNT_RETURNING: ("start", "max_depth"),
    QueryKind.COUNT_AT_DEPTH: ("start", "target", "depth"),
    QueryKind.COUNT_UNDER_COST: ("start", "target", "cost_limit"),
    QueryKind.CHEAPEST_PATH: ("source", "target"),
}
_NODE_PARAMS = frozenset({"start", "target", "source"})
_INT_PARAMS = frozenset({"max_depth", "depth", "cost_limit"})


@dataclass(frozen=True)
class Query:
    """A single named query and its parameters."""

    name: str
    kind: QueryKind
    params: Dict[str, Any] = field(default_factory=dict)

    def run(self, graph: TraceGraph) -> Optional[int]:
        """Execute the query against `graph` and return its answer."""
        p = self.params
        if self.kind is QueryKind.PATH_COST:
            return path_cost(graph, p["route"])
        if self.kind is QueryKind.COUNT_RETURNING:
            return count_returning(graph, p["start"], p["max_depth"])
        if self.kind is QueryKind.COUNT_AT_DEPTH:
            return count_at_depth(graph, p["start"], p["target"], p["depth"])
        if self.kind is QueryKind.COUNT_UNDER_COST:
            return count_under_cost(graph, p["start"], p["target"], p["cost_limit"])
        return cheapest_path(graph, p["source"], p["target"])

    def describe(self) -> str:
        """Return a one-line description of what the query asks."""
        return _describe(self.kind, self.params)


def _describe(kind: QueryKind, p: Mapping[str, Any]) -> str:
    if kind is QueryKind.PATH_COST:
        return "cost of route " + "-".join(str(n) for n in p["route"])
    if kind is QueryKind.COUNT_RETURNING:
        return f"routes {p['start']} to {p['start']} with at most {p['max_depth']} hops"
    if kind is QueryKind.COUNT_AT_DEPTH:
        return f"routes {p['start']} to {p['target']} with exactly {p['depth']} hops"
    if kind is QueryKind.COUNT_UNDER_COST:
        return (
            f"routes {p['start']} to {p['target']} costing less than "
            f"{p['cost_limit']}"
        )
    return f"cheapest route {p['source']} to {p['target']}"


def make_query(kind: QueryKind, name: Optional[str] = None, **params: Any) -> Query:
    """Build a validated `Query`.

    Raises:
        ValueError: If parameters are missing, unexpected or of the wrong type.
    """
    expected = _PARAMS[kind]
    missing = [key for key in expected if key not in params]
    if missing:
        raise ValueError(f"Query type '{kind.name.lower()}' requires {missing}")
    unexpected = sorted(set(params) - set(expected))
    if unexpected:
        raise ValueError(
            f"Unexpected parameters {unexpected} for query type '{kind.name.lower()}'"
        )

    clean: Dict[str, Any] = {}
    for key in expected:
        value = params[key]
        if key == "route":
            clean[key] = _parse_route(value)
        elif key in _NODE_PARAMS:
            clean[key] = _parse_node(key, value)
        elif key in _INT_PARAMS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Parameter '{key}' must be an integer, got {value!r}")
            clean[key] = value

    return Query(name=name or _describe(kind, clean), kind=kind, params=clean)


def _parse_node(key: str, value: Any) -> str:
    # YAML 1.1 turns bare yes/no/on/off into booleans
    if not isinstance(value, str) or not value:
        raise ValueError(f"Parameter '{key}' must be a node name, got {value!r}")
    return value


def _parse_route(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        parts = value.split("-") if value else []
    elif isinstance(value, list):
        parts = value
    else:
        raise ValueError(f"Parameter 'route' must be a list or 'A-B-C' string, got {value!r}")
    return tuple(_parse_node("route", part) for part in parts)


def query_from_dict(entry: Mapping[str, Any]) -> Query:
    """Build a `Query` from one plan entry (``type`` plus parameters)."""
    if not isinstance(entry, Mapping):
        raise ValueError(f"Query entry must be a mapping, got {entry!r}")
    data = {str(k): v for k, v in entry.items()}
    if "type" not in data:
        raise ValueError(f"Query entry {entry!r} is missing 'type'")
    kind = QueryKind.from_string(str(data.pop("type")))
    name = data.pop("name", None)
    if name is not None:
        name = str(name)
    try:
        return make_query(kind, name=name, **data)
    except ValueError as exc:
        raise ValueError(f"Invalid query entry {entry!r}: {exc}") from exc


def load_query_plan(text: str) -> List[Query]:
    """Parse a YAML query plan.

    Args:
        text: YAML document with a top-level ``queries`` list.

    Returns:
        Queries in document order.

    Raises:
        ValueError: If the document or any entry is malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in query plan: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("queries"), list):
        raise ValueError("Query plan must be a mapping with a 'queries' list")
    unknown = sorted(str(k) for k in data if k != "queries")
    if unknown:
        raise ValueError(f"Unrecognized top-level keys in query plan: {unknown}")

    plan = [query_from_dict(entry) for entry in data["queries"]]
    logger.debug("Loaded query plan with %d queries", len(plan))
    return plan


def run_plan(
    graph: TraceGraph, plan: List[Query]
) -> List[Tuple[Query, Optional[int]]]:
    """Run every query of `plan` in order and pair each with its answer."""
    results = []
    for query in plan:
        answer = query.run(graph)
        logger.debug("%s -> %s", query.name, answer)
        results.append((query, answer))
    return results


DEFAULT_PLAN: List[Query] = [
    make_query(QueryKind.PATH_COST, route=["A", "B", "C"]),
    make_query(QueryKind.PATH_COST, route=["A", "D"]),
    make_query(QueryKind.PATH_COST, route=["A", "D", "C"]),
    make_query(QueryKind.PATH_COST, route=["A", "E", "B", "C", "D"]),
    make_query(QueryKind.PATH_COST, route=["A", "E", "D"]),
    make_query(QueryKind.COUNT_RETURNING, start="C", max_depth=3),
    make_query(QueryKind.COUNT_AT_DEPTH, start="A", target="C", depth=4),
    make_query(QueryKind.CHEAPEST_PATH, source="A", target="C"),
    make_query(QueryKind.CHEAPEST_PATH, source="B", target="B"),
    make_query(QueryKind.COUNT_UNDER_COST, start="C", target="C", cost_limit=30),
]
