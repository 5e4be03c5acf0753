"""Shared fixtures: sample trace graphs."""

from __future__ import annotations

import pytest

from tracequery.graph import TraceGraph
from tracequery.io import parse_traces

SAMPLE_INPUT = "AB5, BC4, CD8, DC8, DE6, AD5, CE2, EB3, AE7"


@pytest.fixture
def sample_graph() -> TraceGraph:
    # A─►B 5, A─►D 5, A─►E 7
    # B─►C 4
    # C─►D 8, C─►E 2
    # D─►C 8, D─►E 6
    # E─►B 3
    return TraceGraph.from_traces(parse_traces([SAMPLE_INPUT]))


@pytest.fixture
def small_graph() -> TraceGraph:
    # A─►B 5, A─►D 6, A─►E 7, B─►C 4, C─►D 8, D─►C 4; E has no outgoing traces
    return TraceGraph.from_traces(parse_traces(["AB5, BC4, CD8", "DC4,", "AD6, AE7"]))


@pytest.fixture
def sample_input_file(tmp_path):
    path = tmp_path / "traces.txt"
    path.write_text(SAMPLE_INPUT + "\n", encoding="utf-8")
    return path
