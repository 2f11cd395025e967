"""Tests for the statistics aggregator and result models."""

from linediff.core.diff.text_diff import aggregate, diff
from linediff.core.models import DiffLine, DiffOpKind, DiffResult, DiffStatistics


U = DiffOpKind.UNCHANGED
A = DiffOpKind.ADDED
R = DiffOpKind.REMOVED


class TestAggregate:
    """Counting edit script entries by kind."""

    def test_counts_by_kind(self):
        lines = [
            DiffLine(U, 1, 1, "a", "a"),
            DiffLine(R, left_line_num=2, left_content="b"),
            DiffLine(A, right_line_num=2, right_content="c"),
            DiffLine(A, right_line_num=3, right_content="d"),
        ]
        stats = aggregate(lines)
        assert (stats.added_lines, stats.removed_lines, stats.unchanged_lines) == (2, 1, 1)
        assert stats.total_lines_left == 2
        assert stats.total_lines_right == 3

    def test_empty(self):
        stats = aggregate([])
        assert stats == DiffStatistics()
        assert stats.similarity_ratio == 1.0

    def test_matches_result_counts(self):
        result = diff("a\nb\nc\nd", "a\nc\nd\ne\nf")
        stats = aggregate(result)
        assert stats.added_lines == result.added_count
        assert stats.removed_lines == result.removed_count
        assert stats.unchanged_lines == result.unchanged_count
        assert stats.total_entries == len(result)


class TestDiffStatistics:
    """Derived statistics values."""

    def test_total_changes(self):
        assert DiffStatistics(added_lines=3, removed_lines=2).total_changes == 5

    def test_similarity_ratio(self):
        stats = DiffStatistics(unchanged_lines=3, total_lines_left=4, total_lines_right=6)
        assert stats.similarity_ratio == 0.5

    def test_str(self):
        stats = DiffStatistics(added_lines=1, removed_lines=2, unchanged_lines=3)
        assert str(stats) == "+1 -2 =3"


class TestDiffResult:
    """Result container helpers."""

    def test_len_and_iter(self):
        result = diff("a\nb", "a\nc")
        assert len(result) == 3
        assert list(result) == result.lines

    def test_identical(self):
        assert diff("a\nb", "a\nb").is_identical
        assert not diff("a\nb", "a\nb").has_differences
        assert diff("a", "b").has_differences

    def test_empty_result_is_identical(self):
        assert DiffResult().is_identical

    def test_line_counts(self):
        result = diff("a\nb\nc", "a\nx")
        assert result.left_line_count == 3
        assert result.right_line_count == 2

    def test_statistics_property(self):
        result = diff("a\nb\nc", "a\nx")
        stats = result.statistics
        assert stats.added_lines == 1
        assert stats.removed_lines == 2
        assert stats.unchanged_lines == 1
        assert stats.total_lines_left == 3
        assert stats.total_lines_right == 2

    def test_iter_changes(self):
        result = diff("keep\nold", "keep\nnew")
        assert [line.kind for line in result.iter_changes()] == [R, A]


class TestDiffLine:
    """Per-line helpers."""

    def test_prefix(self):
        assert DiffLine(U, 1, 1, "a", "a").prefix == " "
        assert DiffLine(A, right_line_num=1, right_content="a").prefix == "+"
        assert DiffLine(R, left_line_num=1, left_content="a").prefix == "-"

    def test_content(self):
        assert DiffLine(U, 1, 1, "Left", "left").content == "Left"
        assert DiffLine(A, right_line_num=1, right_content="new").content == "new"
        assert DiffLine(R, left_line_num=1, left_content="old").content == "old"

    def test_is_change(self):
        assert not DiffLine(U, 1, 1, "a", "a").is_change
        assert DiffLine(A, right_line_num=1, right_content="a").is_change
