"""
Diff module for line comparison operations.

Provides:
- The LCS-based line diff engine
- Split and unified view formatting
- Plain-text renderers for terminal output
"""

from linediff.core.diff.text_diff import (
    DiffError,
    InputTooLargeError,
    LcsTable,
    LineDiffEngine,
    NormalizationPolicy,
    aggregate,
    build_lcs_table,
    diff,
    normalize,
    reconstruct,
    split_lines,
)
from linediff.core.diff.formatters import (
    SideBySideFormatter,
    UnifiedFormatter,
    format_split,
    format_unified,
    format_view,
)

__all__ = [
    # Engine
    'DiffError',
    'InputTooLargeError',
    'LcsTable',
    'LineDiffEngine',
    'NormalizationPolicy',
    'aggregate',
    'build_lcs_table',
    'diff',
    'normalize',
    'reconstruct',
    'split_lines',
    # Views
    'SideBySideFormatter',
    'UnifiedFormatter',
    'format_split',
    'format_unified',
    'format_view',
]
