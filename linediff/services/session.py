"""
Interactive comparison session.

Holds the state of a two-pane comparison (both texts, the comparison flags
and the chosen layout) and recomputes the diff only when one of them
changed. The engine itself stays stateless; this object is the caller.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from linediff.core.diff.formatters import format_view
from linediff.core.diff.text_diff import LineDiffEngine, NormalizationPolicy
from linediff.core.models import DiffResult, SplitView, UnifiedRow, ViewMode
from linediff.services.settings import ComparisonSettings


logger = logging.getLogger(__name__)


class DiffSession:
    """
    State for one diff panel.

    Usage:
        session = DiffSession()
        session.left_text = original
        session.right_text = modified
        print(session.summary)
        rows = session.view
    """

    def __init__(
        self,
        left_text: str = "",
        right_text: str = "",
        settings: Optional[ComparisonSettings] = None
    ):
        settings = settings or ComparisonSettings()
        self.left_text = left_text
        self.right_text = right_text
        self.ignore_whitespace = settings.ignore_whitespace
        self.ignore_case = settings.ignore_case
        self.view_mode = settings.view_mode
        self.max_cells = settings.max_table_cells

        self._result: Optional[DiffResult] = None
        self._result_key: Optional[tuple] = None
        self.compute_count = 0

    @property
    def policy(self) -> NormalizationPolicy:
        return NormalizationPolicy(
            ignore_whitespace=self.ignore_whitespace,
            ignore_case=self.ignore_case
        )

    @property
    def has_content(self) -> bool:
        """True when either pane holds text."""
        return bool(self.left_text or self.right_text)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def swap(self) -> None:
        """Exchange the left and right texts."""
        self.left_text, self.right_text = self.right_text, self.left_text

    def clear(self) -> None:
        """Empty both panes."""
        self.left_text = ""
        self.right_text = ""

    # -------------------------------------------------------------------------
    # Outputs
    # -------------------------------------------------------------------------

    @property
    def result(self) -> DiffResult:
        """
        Diff of the current inputs.

        Recomputed only when the texts, the flags or the ceiling changed
        since the last access.
        """
        key = (self.left_text, self.right_text, self.policy, self.max_cells)
        if self._result is None or key != self._result_key:
            engine = LineDiffEngine(self.policy, max_cells=self.max_cells)
            self._result = engine.compare_text(self.left_text, self.right_text)
            self._result_key = key
            self.compute_count += 1
            logger.debug("Session recomputed diff (%d entries)", len(self._result))
        return self._result

    @property
    def view(self) -> Union[SplitView, list[UnifiedRow]]:
        """The current result in the selected layout."""
        return format_view(self.result, self.view_mode)

    def toggle_view_mode(self) -> ViewMode:
        """Switch between split and unified layouts."""
        if self.view_mode == ViewMode.SPLIT:
            self.view_mode = ViewMode.UNIFIED
        else:
            self.view_mode = ViewMode.SPLIT
        return self.view_mode

    @property
    def summary(self) -> str:
        """Human-readable counts, e.g. '+1 added -1 removed 2 unchanged'."""
        result = self.result
        return (
            f"+{result.added_count} added "
            f"-{result.removed_count} removed "
            f"{result.unchanged_count} unchanged"
        )
