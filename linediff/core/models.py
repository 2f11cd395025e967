"""
Core data models for the line diff engine.

This module defines the data structures shared across the package:
- Edit script models (diff lines and results)
- Statistics models
- View projection models (split and unified)

All models are:
- UI-agnostic (can be used with any frontend)
- Created fresh per comparison and owned by the caller
- Immutable where practical
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional


# =============================================================================
# Enumerations
# =============================================================================

class DiffOpKind(Enum):
    """Kind of entry in an edit script."""
    UNCHANGED = auto()  # Line exists in both documents
    ADDED = auto()      # Line exists only in right/new document
    REMOVED = auto()    # Line exists only in left/old document


class ViewMode(Enum):
    """Presentation layout for a diff result."""
    SPLIT = auto()      # Two aligned columns
    UNIFIED = auto()    # Single column with +/-/space markers


# =============================================================================
# Edit Script Models
# =============================================================================

@dataclass(frozen=True)
class DiffLine:
    """
    A single entry of an edit script.

    Unchanged entries carry both line numbers and the original content of
    both sides, which may differ byte-wise when normalization hid the
    difference. Removed entries only have the left side, added entries
    only the right side.
    """
    kind: DiffOpKind
    left_line_num: Optional[int] = None
    right_line_num: Optional[int] = None
    left_content: Optional[str] = None
    right_content: Optional[str] = None

    @property
    def prefix(self) -> str:
        """Get the unified diff indicator character."""
        prefixes = {
            DiffOpKind.UNCHANGED: ' ',
            DiffOpKind.ADDED: '+',
            DiffOpKind.REMOVED: '-',
        }
        return prefixes[self.kind]

    @property
    def content(self) -> str:
        """Content shown in a single-column layout."""
        if self.kind == DiffOpKind.ADDED:
            return self.right_content or ""
        return self.left_content or ""

    @property
    def is_change(self) -> bool:
        return self.kind != DiffOpKind.UNCHANGED


@dataclass
class DiffStatistics:
    """Statistics about a diff result."""
    added_lines: int = 0
    removed_lines: int = 0
    unchanged_lines: int = 0
    total_lines_left: int = 0
    total_lines_right: int = 0

    @property
    def total_changes(self) -> int:
        """Total number of changed lines."""
        return self.added_lines + self.removed_lines

    @property
    def total_entries(self) -> int:
        return self.added_lines + self.removed_lines + self.unchanged_lines

    @property
    def similarity_ratio(self) -> float:
        """
        Calculate similarity ratio (0.0 to 1.0).

        1.0 means identical, 0.0 means nothing in common.
        """
        total = max(self.total_lines_left, self.total_lines_right)
        if total == 0:
            return 1.0
        return self.unchanged_lines / total

    def __str__(self) -> str:
        return f"+{self.added_lines} -{self.removed_lines} ={self.unchanged_lines}"


@dataclass
class DiffResult:
    """
    Complete result of a line diff.

    Holds the ordered edit script plus the aggregate counts. Two results
    computed from the same inputs and policy compare equal.
    """
    lines: list[DiffLine] = field(default_factory=list)
    added_count: int = 0
    removed_count: int = 0
    unchanged_count: int = 0

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[DiffLine]:
        return iter(self.lines)

    @property
    def is_identical(self) -> bool:
        """True when no line was added or removed."""
        return self.added_count == 0 and self.removed_count == 0

    @property
    def has_differences(self) -> bool:
        return not self.is_identical

    @property
    def left_line_count(self) -> int:
        """Number of lines in the left document."""
        return self.unchanged_count + self.removed_count

    @property
    def right_line_count(self) -> int:
        """Number of lines in the right document."""
        return self.unchanged_count + self.added_count

    @property
    def statistics(self) -> DiffStatistics:
        return DiffStatistics(
            added_lines=self.added_count,
            removed_lines=self.removed_count,
            unchanged_lines=self.unchanged_count,
            total_lines_left=self.left_line_count,
            total_lines_right=self.right_line_count,
        )

    def iter_changes(self) -> Iterator[DiffLine]:
        """Iterate over only the added and removed lines."""
        for line in self.lines:
            if line.is_change:
                yield line


# =============================================================================
# View Models
# =============================================================================

@dataclass(frozen=True)
class SplitRow:
    """
    One cell of a split view column.

    A placeholder row (opposite an insertion or deletion) has no line
    number and empty content.
    """
    kind: DiffOpKind
    line_number: Optional[int] = None
    content: str = ""

    @property
    def is_placeholder(self) -> bool:
        return self.line_number is None


@dataclass
class SplitView:
    """
    Two parallel columns for side-by-side display.

    Rows at the same index in both columns come from the same diff line.
    """
    left: list[SplitRow] = field(default_factory=list)
    right: list[SplitRow] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.left)

    def rows(self) -> Iterator[tuple[SplitRow, SplitRow]]:
        """Iterate over aligned (left, right) row pairs."""
        return zip(self.left, self.right)


@dataclass(frozen=True)
class UnifiedRow:
    """One row of a unified view."""
    kind: DiffOpKind
    indicator: str
    content: str
    left_line_num: Optional[int] = None
    right_line_num: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.indicator}{self.content}"
