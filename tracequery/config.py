"""Configuration for TraceQuery components."""

from dataclasses import dataclass


@dataclass
class TraceQueryConfig:
    """Settings shared by the ingestion, formatting and CLI layers."""

    # Text shown for a query that has no answer
    absent_marker: str = "NO SUCH TRACE"

    # One trace in the edge-list notation: source letter, target letter, cost
    trace_pattern: str = r"([A-Z])([A-Z])(\d+)"

    # Minimum column width for ASCII tables
    table_min_width: int = 6


# Global configuration instance
CONFIG = TraceQueryConfig()
