"""
Line-oriented text diff engine.

Computes a minimal edit script between two line sequences using the
longest-common-subsequence dynamic program, with support for:
- Whitespace-insensitive comparison
- Case-insensitive comparison
- A size ceiling on the dynamic-programming table
- Per-row progress reporting and cooperative cancellation

The engine is a pure function of its inputs: it performs no I/O and keeps
no state between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from linediff.core.models import (
    DiffLine,
    DiffOpKind,
    DiffResult,
    DiffStatistics,
)


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Errors
# =============================================================================

class DiffError(Exception):
    """Base class for diff engine errors."""
    pass


class InputTooLargeError(DiffError):
    """
    Raised when the comparison table would exceed the configured ceiling.

    The check happens before any table memory is allocated, so callers can
    truncate, chunk or reject the input without a partial result.
    """

    def __init__(self, left_lines: int, right_lines: int, max_cells: int):
        self.left_lines = left_lines
        self.right_lines = right_lines
        self.cells = left_lines * right_lines
        self.max_cells = max_cells
        super().__init__(
            f"Input too large to compare: {left_lines} x {right_lines} lines "
            f"needs {self.cells} cells (limit {max_cells})"
        )


# =============================================================================
# Normalizer
# =============================================================================

@dataclass(frozen=True)
class NormalizationPolicy:
    """
    Comparison policy for lines.

    Affects only how lines are compared, never the content stored in the
    diff result.
    """
    ignore_whitespace: bool = False
    ignore_case: bool = False

    @property
    def is_exact(self) -> bool:
        return not (self.ignore_whitespace or self.ignore_case)

    def normalize_line(self, line: str) -> str:
        """Normalize a line according to the policy."""
        result = line

        # Collapse whitespace runs and trim both ends
        if self.ignore_whitespace:
            result = ' '.join(result.split())

        if self.ignore_case:
            result = result.lower()

        return result


DEFAULT_POLICY = NormalizationPolicy()


def normalize(line: str, policy: NormalizationPolicy = DEFAULT_POLICY) -> str:
    """Canonicalize a line for comparison under the given policy."""
    return policy.normalize_line(line)


def _normalize_all(
    lines: Sequence[str],
    policy: NormalizationPolicy
) -> list[str]:
    if policy.is_exact:
        return list(lines)
    return [policy.normalize_line(line) for line in lines]


# =============================================================================
# LCS Table Builder
# =============================================================================

class LcsTable:
    """
    Longest-common-subsequence lengths for every pair of prefixes.

    Stored as a flat buffer of (rows x cols) cells where
    rows = len(left) + 1 and cols = len(right) + 1.
    """

    __slots__ = ('rows', 'cols', '_cells')

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self._cells = [0] * (rows * cols)

    def __getitem__(self, index: tuple[int, int]) -> int:
        i, j = index
        return self._cells[i * self.cols + j]

    @property
    def length(self) -> int:
        """Length of the longest common subsequence."""
        return self._cells[-1]

    def row(self, i: int) -> list[int]:
        """Copy of row ``i``."""
        start = i * self.cols
        return self._cells[start:start + self.cols]


def build_lcs_table(
    left: Sequence[str],
    right: Sequence[str],
    policy: NormalizationPolicy = DEFAULT_POLICY,
    progress_callback: Optional[ProgressCallback] = None
) -> LcsTable:
    """
    Build the LCS dynamic-programming table.

    Args:
        left: Lines of the left/original document
        right: Lines of the right/modified document
        policy: Comparison policy applied to both sides
        progress_callback: Called with (rows_done, total_rows) after each
            row. Raising from it aborts the build.

    Returns:
        The filled table
    """
    left_norm = _normalize_all(left, policy)
    right_norm = _normalize_all(right, policy)
    return _fill_table(left_norm, right_norm, progress_callback)


def _fill_table(
    left_norm: list[str],
    right_norm: list[str],
    progress_callback: Optional[ProgressCallback]
) -> LcsTable:
    m = len(left_norm)
    n = len(right_norm)
    table = LcsTable(m + 1, n + 1)
    cells = table._cells
    cols = table.cols

    for i in range(1, m + 1):
        a = left_norm[i - 1]
        row = i * cols
        prev = row - cols
        for j in range(1, n + 1):
            if a == right_norm[j - 1]:
                cells[row + j] = cells[prev + j - 1] + 1
            else:
                up = cells[prev + j]
                back = cells[row + j - 1]
                cells[row + j] = up if up >= back else back

        if progress_callback:
            progress_callback(i, m)

    return table


# =============================================================================
# Edit Script Reconstructor
# =============================================================================

def reconstruct(
    table: LcsTable,
    left: Sequence[str],
    right: Sequence[str],
    policy: NormalizationPolicy = DEFAULT_POLICY
) -> list[DiffLine]:
    """
    Walk the table backwards and produce the ordered edit script.

    When both an insertion and a deletion would keep an optimal alignment,
    the insertion is taken first during the backward walk, so in the final
    script a changed line reads as the removal followed by the addition.
    """
    return _walk_back(
        table,
        left,
        right,
        _normalize_all(left, policy),
        _normalize_all(right, policy),
    )


def _walk_back(
    table: LcsTable,
    left: Sequence[str],
    right: Sequence[str],
    left_norm: list[str],
    right_norm: list[str]
) -> list[DiffLine]:
    script: list[DiffLine] = []
    i = len(left)
    j = len(right)

    while i > 0 or j > 0:
        if i > 0 and j > 0 and left_norm[i - 1] == right_norm[j - 1]:
            script.append(DiffLine(
                kind=DiffOpKind.UNCHANGED,
                left_line_num=i,
                right_line_num=j,
                left_content=left[i - 1],
                right_content=right[j - 1]
            ))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i, j - 1] >= table[i - 1, j]):
            script.append(DiffLine(
                kind=DiffOpKind.ADDED,
                right_line_num=j,
                right_content=right[j - 1]
            ))
            j -= 1
        else:
            script.append(DiffLine(
                kind=DiffOpKind.REMOVED,
                left_line_num=i,
                left_content=left[i - 1]
            ))
            i -= 1

    script.reverse()
    return script


# =============================================================================
# Statistics Aggregator
# =============================================================================

def aggregate(lines: Sequence[DiffLine] | DiffResult) -> DiffStatistics:
    """Count edit script entries by kind."""
    stats = DiffStatistics()

    for line in lines:
        if line.kind == DiffOpKind.UNCHANGED:
            stats.unchanged_lines += 1
        elif line.kind == DiffOpKind.ADDED:
            stats.added_lines += 1
        elif line.kind == DiffOpKind.REMOVED:
            stats.removed_lines += 1

    stats.total_lines_left = stats.unchanged_lines + stats.removed_lines
    stats.total_lines_right = stats.unchanged_lines + stats.added_lines
    return stats


# =============================================================================
# Engine
# =============================================================================

def split_lines(text: str) -> list[str]:
    """
    Split a text blob into lines.

    An empty blob has no lines. Otherwise the text is split on "\\n", so a
    trailing newline produces a final empty line.
    """
    if not text:
        return []
    return text.split('\n')


class LineDiffEngine:
    """
    Engine for comparing two documents line by line.

    Holds only configuration; every comparison starts from scratch.
    """

    def __init__(
        self,
        policy: Optional[NormalizationPolicy] = None,
        max_cells: Optional[int] = None
    ):
        self.policy = policy or DEFAULT_POLICY
        # Zero or a negative ceiling means no ceiling
        self.max_cells = max_cells if max_cells is not None and max_cells > 0 else None

    def check_size(self, left_count: int, right_count: int) -> None:
        """Raise InputTooLargeError when the table would exceed the ceiling."""
        if self.max_cells is None:
            return
        if left_count * right_count > self.max_cells:
            logger.warning(
                "Refusing to compare %d x %d lines (limit %d cells)",
                left_count, right_count, self.max_cells
            )
            raise InputTooLargeError(left_count, right_count, self.max_cells)

    def compare(
        self,
        left_lines: Sequence[str],
        right_lines: Sequence[str],
        progress_callback: Optional[ProgressCallback] = None
    ) -> DiffResult:
        """
        Compare two sequences of lines.

        Args:
            left_lines: Lines from the left/original document
            right_lines: Lines from the right/modified document
            progress_callback: Called with (rows_done, total_rows) while
                the table is built

        Returns:
            DiffResult containing the edit script and counts
        """
        left = list(left_lines)
        right = list(right_lines)
        self.check_size(len(left), len(right))

        logger.debug(
            "Building LCS table for %d x %d lines (%s)",
            len(left), len(right), self.policy
        )

        left_norm = _normalize_all(left, self.policy)
        right_norm = _normalize_all(right, self.policy)
        table = _fill_table(left_norm, right_norm, progress_callback)
        script = _walk_back(table, left, right, left_norm, right_norm)

        stats = aggregate(script)
        logger.debug("Edit script has %d entries (%s)", len(script), stats)

        return DiffResult(
            lines=script,
            added_count=stats.added_lines,
            removed_count=stats.removed_lines,
            unchanged_count=stats.unchanged_lines
        )

    def compare_text(
        self,
        left: str,
        right: str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> DiffResult:
        """Compare two raw multi-line text blobs."""
        return self.compare(split_lines(left), split_lines(right), progress_callback)


def diff(
    left: str,
    right: str,
    policy: Optional[NormalizationPolicy] = None,
    *,
    max_cells: Optional[int] = None,
    progress_callback: Optional[ProgressCallback] = None
) -> DiffResult:
    """
    Diff two text blobs line by line.

    Args:
        left: Original text
        right: Modified text
        policy: Comparison policy (exact comparison when omitted)
        max_cells: Ceiling on left_lines * right_lines; None, zero or a
            negative value disables it
        progress_callback: Called with (rows_done, total_rows); raising
            from it aborts the comparison

    Returns:
        DiffResult for the two texts

    Raises:
        InputTooLargeError: If the inputs exceed ``max_cells``
    """
    engine = LineDiffEngine(policy, max_cells=max_cells)
    return engine.compare_text(left, right, progress_callback)
