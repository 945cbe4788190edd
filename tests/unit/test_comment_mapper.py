"""
Unit tests for mapping review items to review comments.
"""

import pytest

from pr_review_bot.formatting.github import CommentMapper, parse_line_number
from pr_review_bot.models.pr_diff import DiffFile, DiffChunk, DiffLine
from pr_review_bot.models.review import ReviewItem


class TestParseLineNumber:
    """Unit tests for line number parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("42", 42),
        (" 7 ", 7),
        ("42.0", 42),
        ("1", 1),
    ])
    def test_valid(self, raw, expected):
        assert parse_line_number(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "-3", "abc", "", "4.5", "inf", "nan", "None", "1,2"])
    def test_invalid(self, raw):
        assert parse_line_number(raw) is None


class TestCommentMapper:
    """Unit tests for CommentMapper."""

    def test_single_valid_item(self):
        comments = CommentMapper().to_comments(
            DiffFile(target_path="src/app.ts"),
            [ReviewItem(line_number="42", review_comment="x")],
        )

        assert len(comments) == 1
        assert comments[0].line == 42
        assert comments[0].path == "src/app.ts"
        assert comments[0].body == "x"

    @pytest.mark.parametrize("line_number", ["0", "-3", "abc"])
    def test_invalid_items_yield_nothing(self, line_number):
        comments = CommentMapper().to_comments(
            DiffFile(target_path="src/app.ts"),
            [ReviewItem(line_number=line_number, review_comment="x")],
        )
        assert comments == []

    def test_partial_failure_is_isolated(self):
        items = [
            ReviewItem(line_number="abc", review_comment="dropped"),
            ReviewItem(line_number="3", review_comment="kept"),
            ReviewItem(line_number="-1", review_comment="dropped"),
            ReviewItem(line_number="10", review_comment="kept too"),
        ]

        comments = CommentMapper().to_comments(DiffFile(target_path="a.py"), items)

        assert [(c.line, c.body) for c in comments] == [(3, "kept"), (10, "kept too")]

    def test_deleted_file_yields_nothing(self):
        deleted = DiffFile(
            target_path="/dev/null",
            chunks=[DiffChunk(raw_content="@@ -1,1 +0,0 @@", changes=[DiffLine(None, 1, "-gone")])],
        )

        comments = CommentMapper().to_comments(deleted, [ReviewItem(line_number="1", review_comment="x")])

        assert comments == []

    def test_missing_target_path_yields_nothing(self):
        comments = CommentMapper().to_comments(
            DiffFile(target_path=None),
            [ReviewItem(line_number="1", review_comment="x")],
        )
        assert comments == []
