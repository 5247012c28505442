"""
Utility functions for formatting text-based reports and tables.

Provides consistent table formatting for match reports printed by the CLI.
"""

from typing import Any, List


class Column:
    """Column definition for table formatting."""

    def __init__(self, name: str, width: int, align: str = "<", precision: int = None):
        """
        Args:
            name: Column header name
            width: Column width in characters (longer text values are truncated)
            align: Alignment ('<' left, '>' right, '^' center)
            precision: Decimal places for float values
        """
        self.name = name
        self.width = width
        self.align = align
        self.precision = precision

    def format_header(self) -> str:
        return f"{self.name:{self.align}{self.width}}"

    def format_value(self, value: Any) -> str:
        if isinstance(value, float) and self.precision is not None:
            return f"{value:{self.align}{self.width}.{self.precision}f}"

        text = str(value)
        if len(text) > self.width:
            text = text[: max(self.width - 3, 0)] + "..."
        return f"{text:{self.align}{self.width}}"


class TableFormatter:
    """Builder for formatted text tables with aligned columns."""

    def __init__(self, columns: List[Column], total_width: int = None):
        """
        Args:
            columns: List of Column definitions
            total_width: Width of separator lines (defaults to the summed column widths)
        """
        self.columns = columns
        self.total_width = total_width or sum(col.width for col in columns) + len(columns) - 1
        self.lines: List[str] = []

    def add_section_header(self, title: str) -> "TableFormatter":
        """Add section title framed by separator lines."""
        self.lines.append("=" * self.total_width)
        self.lines.append(title)
        self.lines.append("=" * self.total_width)
        return self

    def add_table_header(self) -> "TableFormatter":
        """Add header row followed by a dashed separator."""
        self.lines.append(" ".join(col.format_header() for col in self.columns).rstrip())
        self.lines.append("-" * self.total_width)
        return self

    def add_row(self, values: List[Any]) -> "TableFormatter":
        """
        Add data row with column values.

        Raises:
            ValueError: If number of values doesn't match columns
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        row_parts = [col.format_value(val) for col, val in zip(self.columns, values)]
        self.lines.append(" ".join(row_parts).rstrip())
        return self

    def add_text(self, text: str) -> "TableFormatter":
        self.lines.append(text)
        return self

    def add_blank_line(self) -> "TableFormatter":
        self.lines.append("")
        return self

    def render(self) -> str:
        return "\n".join(self.lines)


def format_percentage(count: int, total: int, decimal_places: int = 0) -> str:
    """
    Format count as percentage of total.

    Returns:
        Formatted percentage string (e.g., "75%"); "0%" when total is zero
    """
    if total == 0:
        return f"{0:.{decimal_places}f}%"
    percent = (count / total) * 100
    return f"{percent:.{decimal_places}f}%"
