"""Fixed-width text tables for per-context output."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Column:
    """A table column.

    Attributes:
        header: Header text.
        align: 'l', 'r' or 'c'.
        min_width: Lower bound for the computed column width.
    """

    header: str
    align: str = "l"
    min_width: int = 0


@dataclass
class TableBuilder:
    """Collects rows and renders them with aligned columns.

    The last column is never padded so rendered lines carry no trailing
    whitespace.

    Usage:
        table = TableBuilder([Column("CONTEXT"), Column("SERVER VERSION")])
        table.add_row("prod", "v1.29.1")
        print("\\n".join(table.render()))
    """

    columns: list[Column]
    gap: str = "  "
    rule: bool = False
    rows: list[list[str]] = field(default_factory=list)

    def add_row(self, *cells: str) -> None:
        if len(cells) != len(self.columns):
            raise ValueError(f"expected {len(self.columns)} cells, got {len(cells)}")
        self.rows.append(list(cells))

    def width(self, index: int) -> int:
        """Compute the display width of a column."""
        column = self.columns[index]
        widths = [column.min_width, len(column.header)]
        widths.extend(len(row[index]) for row in self.rows)
        return max(widths)

    def _format_line(self, cells: list[str], widths: list[int]) -> str:
        parts = []
        last = len(cells) - 1
        for i, cell in enumerate(cells):
            if i == last:
                parts.append(cell)
                break
            align = self.columns[i].align
            if align == "r":
                parts.append(cell.rjust(widths[i]))
            elif align == "c":
                parts.append(cell.center(widths[i]))
            else:
                parts.append(cell.ljust(widths[i]))
        return self.gap.join(parts)

    def render(self, show_header: bool = True) -> list[str]:
        """Render the table as a list of lines."""
        widths = [self.width(i) for i in range(len(self.columns))]
        lines = []
        if show_header:
            lines.append(self._format_line([c.header for c in self.columns], widths))
            if self.rule:
                rule_cells = ["-" * widths[i] for i in range(len(self.columns) - 1)]
                rule_cells.append("-" * len(self.columns[-1].header))
                lines.append(self._format_line(rule_cells, widths))
        for row in self.rows:
            lines.append(self._format_line(row, widths))
        return lines
