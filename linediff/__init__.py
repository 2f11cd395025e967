"""
Line-oriented text diff engine.

Computes a minimal edit script between two documents and projects it into
side-by-side and unified layouts.
"""

from linediff.core.models import (
    DiffLine,
    DiffOpKind,
    DiffResult,
    DiffStatistics,
    SplitRow,
    SplitView,
    UnifiedRow,
    ViewMode,
)
from linediff.core.diff import (
    DiffError,
    InputTooLargeError,
    LineDiffEngine,
    NormalizationPolicy,
    aggregate,
    diff,
    format_view,
    normalize,
)

__version__ = "1.0.0"

__all__ = [
    'DiffError',
    'DiffLine',
    'DiffOpKind',
    'DiffResult',
    'DiffStatistics',
    'InputTooLargeError',
    'LineDiffEngine',
    'NormalizationPolicy',
    'SplitRow',
    'SplitView',
    'UnifiedRow',
    'ViewMode',
    'aggregate',
    'diff',
    'format_view',
    'normalize',
]
