"""
View formatting for diff results.

Projects a DiffResult into:
- A split view (two aligned columns with placeholders)
- A unified view (one column with +/-/space indicators)

and renders either as plain text for terminal output. Formatting never
mutates the result or compares lines again.
"""

from __future__ import annotations

from typing import Iterator, Optional, Union

from linediff.core.models import (
    DiffOpKind,
    DiffResult,
    SplitRow,
    SplitView,
    UnifiedRow,
    ViewMode,
)


def format_split(result: DiffResult) -> SplitView:
    """Build two parallel columns, one row per diff line."""
    view = SplitView()

    for line in result.lines:
        if line.left_line_num is not None:
            view.left.append(SplitRow(line.kind, line.left_line_num, line.left_content or ""))
        else:
            view.left.append(SplitRow(line.kind))

        if line.right_line_num is not None:
            view.right.append(SplitRow(line.kind, line.right_line_num, line.right_content or ""))
        else:
            view.right.append(SplitRow(line.kind))

    return view


def format_unified(result: DiffResult) -> list[UnifiedRow]:
    """Build a single column of indicator-prefixed rows."""
    return [
        UnifiedRow(
            kind=line.kind,
            indicator=line.prefix,
            content=line.content,
            left_line_num=line.left_line_num,
            right_line_num=line.right_line_num
        )
        for line in result.lines
    ]


def format_view(
    result: DiffResult,
    mode: ViewMode = ViewMode.SPLIT
) -> Union[SplitView, list[UnifiedRow]]:
    """
    Format a diff result for display.

    Args:
        result: The diff to project
        mode: Layout to produce

    Returns:
        SplitView for ViewMode.SPLIT, list of UnifiedRow for ViewMode.UNIFIED
    """
    if mode == ViewMode.SPLIT:
        return format_split(result)
    if mode == ViewMode.UNIFIED:
        return format_unified(result)
    raise ValueError(f"Unknown view mode: {mode!r}")


# =============================================================================
# Plain-text Renderers
# =============================================================================

class SideBySideFormatter:
    """Format diff results for side-by-side terminal display."""

    SEPARATORS = {
        DiffOpKind.UNCHANGED: "   ",
        DiffOpKind.REMOVED: " < ",
        DiffOpKind.ADDED: " > ",
    }

    def __init__(
        self,
        width: int = 80,
        tab_size: int = 4,
        show_line_numbers: bool = True
    ):
        self.width = width
        self.tab_size = tab_size
        self.show_line_numbers = show_line_numbers

    def format(self, result: DiffResult) -> Iterator[tuple[str, str, str]]:
        """
        Format diff for side-by-side display.

        Yields tuples of (left_cell, separator, right_cell)
        """
        view = format_split(result)
        for left, right in view.rows():
            yield (
                self._format_row(left),
                self.SEPARATORS[left.kind],
                self._format_row(right)
            )

    def render(self, result: DiffResult) -> Iterator[str]:
        """Yield complete padded lines."""
        column = self.column_width
        for left, sep, right in self.format(result):
            yield f"{left:<{column}}{sep}{right}".rstrip()

    @property
    def column_width(self) -> int:
        """Width of each column, leaving room for the separator."""
        return max(1, (self.width - 3) // 2)

    def _format_row(self, row: SplitRow) -> str:
        """Format a single cell with an optional line number."""
        content = row.content.replace('\t', ' ' * self.tab_size)

        if self.show_line_numbers:
            prefix = f"{row.line_number:4d}: " if row.line_number is not None else " " * 6
        else:
            prefix = ""

        cell = prefix + content
        column = self.column_width
        if len(cell) > column:
            # Narrow columns cut into the line number as well
            cell = cell[:column - 3] + "..." if column > 3 else cell[:column]

        return cell


class UnifiedFormatter:
    """Format diff results as a single indicator-prefixed column."""

    def __init__(self, tab_size: int = 4, show_line_numbers: bool = False):
        self.tab_size = tab_size
        self.show_line_numbers = show_line_numbers

    def render(self, result: DiffResult) -> Iterator[str]:
        for row in format_unified(result):
            content = row.content.replace('\t', ' ' * self.tab_size)
            if self.show_line_numbers:
                yield (
                    f"{self._number(row.left_line_num)} "
                    f"{self._number(row.right_line_num)} "
                    f"{row.indicator}{content}"
                )
            else:
                yield f"{row.indicator}{content}"

    @staticmethod
    def _number(value: Optional[int]) -> str:
        return f"{value:4d}" if value is not None else "    "
