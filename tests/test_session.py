"""Tests for the interactive comparison session."""

import pytest

from linediff.core.diff.text_diff import InputTooLargeError, NormalizationPolicy
from linediff.core.models import DiffOpKind, SplitView, ViewMode
from linediff.services.session import DiffSession
from linediff.services.settings import ComparisonSettings


class TestDiffSession:
    """State, memoisation and actions of a diff panel."""

    def test_empty_session(self):
        session = DiffSession()
        assert not session.has_content
        assert len(session.result) == 0
        assert session.summary == "+0 added -0 removed 0 unchanged"

    def test_summary(self):
        session = DiffSession("line1\nline2\nline3", "line1\nlineX\nline3")
        assert session.summary == "+1 added -1 removed 2 unchanged"

    def test_result_is_memoised(self):
        session = DiffSession("a\nb", "a\nc")
        first = session.result
        assert session.result is first
        assert session.summary
        assert session.compute_count == 1

    def test_text_change_recomputes(self):
        session = DiffSession("a", "a")
        assert session.result.is_identical
        session.right_text = "b"
        assert not session.result.is_identical
        assert session.compute_count == 2

    def test_flag_change_recomputes(self):
        session = DiffSession("Hello", "hello")
        assert session.result.has_differences
        session.ignore_case = True
        assert session.result.is_identical
        assert session.policy == NormalizationPolicy(ignore_case=True)

    def test_settings_seed_state(self):
        settings = ComparisonSettings(ignore_whitespace=True, view_mode=ViewMode.UNIFIED)
        session = DiffSession("a  b", "a b", settings)
        assert session.ignore_whitespace
        assert session.view_mode == ViewMode.UNIFIED
        assert session.result.is_identical

    def test_swap(self):
        session = DiffSession("old", "old\nnew")
        assert session.result.added_count == 1
        session.swap()
        assert session.left_text == "old\nnew"
        assert session.right_text == "old"
        assert session.result.removed_count == 1
        assert session.result.added_count == 0

    def test_clear(self):
        session = DiffSession("x", "y")
        session.clear()
        assert not session.has_content
        assert len(session.result) == 0

    def test_view_follows_mode(self):
        session = DiffSession("a", "b")
        assert isinstance(session.view, SplitView)
        assert session.toggle_view_mode() == ViewMode.UNIFIED
        rows = session.view
        assert [row.indicator for row in rows] == ["-", "+"]
        assert session.toggle_view_mode() == ViewMode.SPLIT

    def test_view_does_not_recompute(self):
        session = DiffSession("a", "b")
        session.view
        session.toggle_view_mode()
        session.view
        assert session.compute_count == 1

    def test_ceiling_propagates(self):
        settings = ComparisonSettings(max_table_cells=1)
        session = DiffSession("a\nb", "c\nd", settings)
        with pytest.raises(InputTooLargeError):
            session.result

    def test_unchanged_keeps_both_sides(self):
        session = DiffSession("Hello", "HELLO")
        session.ignore_case = True
        line = session.result.lines[0]
        assert line.kind == DiffOpKind.UNCHANGED
        assert (line.left_content, line.right_content) == ("Hello", "HELLO")
