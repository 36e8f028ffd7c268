"""
Fixed-width text rendering of tables.
"""

from typing import Any, Iterable

CELL_WIDTH = 15


def render_row(values: Iterable[Any], width: int = CELL_WIDTH) -> str:
    return "| " + "".join(f"{str(v):>{width}}" for v in values) + " |"


def render_table(table, width: int = CELL_WIDTH) -> str:
    """Header, rows and separator lines, each cell right-justified."""
    rule = "|-" + "-" * (width * len(table.attributes)) + "-|"
    lines = ["", f" Table {table.name}", rule, render_row(table.attributes, width), rule]
    lines.extend(render_row(t, width) for t in table.rows)
    lines.append(rule)
    return "\n".join(lines)
