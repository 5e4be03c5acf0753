"""Command-line interface for TraceQuery."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from tracequery.exceptions import TraceQueryError
from tracequery.graph import TraceGraph
from tracequery.io import graph_to_dict, load_trace_graph
from tracequery.logging import configure_logging, get_logger
from tracequery.plan import DEFAULT_PLAN, Query, load_query_plan, run_plan
from tracequery.report import format_result, format_table

logger = get_logger(__name__)


def _read_graph(source: str, stdin: TextIO) -> TraceGraph:
    """Load a graph from a file path, or from `stdin` when `source` is ``-``.

    Raises:
        ValueError: If the input contains no traces.
    """
    if source == "-":
        graph = load_trace_graph(stdin)
    else:
        with open(source, "r", encoding="utf-8") as fh:
            graph = load_trace_graph(fh)
    if graph.number_of_nodes() == 0:
        raise ValueError(f"No traces found in input '{source}'")
    logger.info(
        "Loaded %d nodes and %d traces from %s",
        graph.number_of_nodes(),
        graph.number_of_edges(),
        "stdin" if source == "-" else source,
    )
    return graph


def _run_queries(source: str, plan_path: Optional[Path], as_json: bool) -> None:
    """Answer every query of the plan and print the results."""
    plan: List[Query] = DEFAULT_PLAN
    if plan_path is not None:
        try:
            plan = load_query_plan(plan_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.error(f"Query plan file not found: {plan_path}")
            print(f"ERROR: Query plan file not found: {plan_path}")
            sys.exit(1)
        except OSError as e:
            logger.error(f"Cannot read query plan {plan_path}: {e.strerror or e}")
            print(f"ERROR: Cannot read query plan {plan_path}: {e.strerror or e}")
            sys.exit(1)
        except ValueError as e:
            logger.error(f"Invalid query plan {plan_path}: {e}")
            print(f"ERROR: Invalid query plan {plan_path}: {e}")
            sys.exit(1)
        logger.info("Loaded %d queries from %s", len(plan), plan_path)

    try:
        graph = _read_graph(source, sys.stdin)
        results = run_plan(graph, plan)
    except FileNotFoundError as e:
        logger.error(f"Input file not found: {e.filename}")
        print(f"ERROR: Input file not found: {e.filename}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Cannot read input {source}: {e.strerror or e}")
        print(f"ERROR: Cannot read input {source}: {e.strerror or e}")
        sys.exit(1)
    except (TraceQueryError, ValueError) as e:
        logger.error(f"Failed to run queries: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to run queries: {type(e).__name__}: {e}")
        sys.exit(1)

    if as_json:
        payload = [
            {
                "name": query.name,
                "query": query.kind.name.lower(),
                "description": query.describe(),
                "result": answer,
            }
            for query, answer in results
        ]
        print(json.dumps(payload, indent=2))
        return

    for _, answer in results:
        print(format_result(answer))


def _inspect_graph(source: str, as_json: bool) -> None:
    """Print a summary of the loaded graph."""
    try:
        graph = _read_graph(source, sys.stdin)
    except FileNotFoundError as e:
        logger.error(f"Input file not found: {e.filename}")
        print(f"ERROR: Input file not found: {e.filename}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Cannot read input {source}: {e.strerror or e}")
        print(f"ERROR: Cannot read input {source}: {e.strerror or e}")
        sys.exit(1)
    except (TraceQueryError, ValueError) as e:
        logger.error(f"Failed to load graph: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to load graph: {type(e).__name__}: {e}")
        sys.exit(1)

    if as_json:
        print(json.dumps(graph_to_dict(graph), indent=2))
        return

    sinks = [node for node in graph.nodes if not graph.neighbors(node)]
    print("GRAPH SUMMARY")
    print("=" * 60)
    print(f"Nodes: {graph.number_of_nodes()}")
    print(f"Traces: {graph.number_of_edges()}")
    if sinks:
        print(f"Nodes without outgoing traces: {', '.join(str(n) for n in sinks)}")
    print()
    rows = [[t.source, t.target, t.cost] for t in graph.traces()]
    print(format_table(["Source", "Target", "Cost"], rows))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``tracequery`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="tracequery",
        description="Answer route queries over a trace graph.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Answer queries over a graph")
    run_parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Edge-list file such as 'AB5, BC4' (default: '-' for stdin)",
    )
    run_parser.add_argument(
        "--plan",
        "-p",
        type=Path,
        default=None,
        help="YAML query plan (default: the built-in ten queries)",
    )
    run_parser.add_argument(
        "--json", action="store_true", help="Print results as JSON"
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate an edge list and summarize the graph"
    )
    inspect_parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Edge-list file (default: '-' for stdin)",
    )
    inspect_parser.add_argument(
        "--json", action="store_true", help="Print the graph as node-link JSON"
    )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if configure_logging(verbose=args.verbose, quiet=args.quiet) == logging.DEBUG:
        logger.debug("Debug logging enabled")

    if args.command == "run":
        _run_queries(args.input, args.plan, args.json)
    elif args.command == "inspect":
        _inspect_graph(args.input, args.json)


if __name__ == "__main__":
    main()
