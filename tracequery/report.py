"""Text rendering of query answers."""

from __future__ import annotations

from typing import Any, List, Optional

from tracequery.config import CONFIG


def format_result(value: Optional[int], absent: Optional[str] = None) -> str:
    """Render a query answer.

    Args:
        value: Query result; None means the query has no answer.
        absent: Text for a missing answer. Defaults to ``CONFIG.absent_marker``.

    Returns:
        The decimal value, or the absence marker.
    """
    if value is None:
        return CONFIG.absent_marker if absent is None else absent
    return str(value)


def format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers.
        rows: Data rows.
        min_width: Minimum column width. Defaults to ``CONFIG.table_min_width``.

    Returns:
        Formatted table string, or an empty string if there are no rows.
    """
    if not rows:
        return ""
    if min_width is None:
        min_width = CONFIG.table_min_width

    all_data = [[str(h) for h in headers]] + [[str(item) for item in row] for row in rows]
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(row[col_idx]) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(all_data[0])]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in all_data[1:]:
        lines.append(format_row(row))
    return "\n".join(lines)
