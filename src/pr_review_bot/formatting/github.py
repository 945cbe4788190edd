"""
GitHub Comment Mapper

Maps validated review items onto inline review comments
(path + new-file line + body).
"""

import logging
import math
from typing import List, Optional

from ..models.pr_diff import DiffFile
from ..models.review import CommentRecord, ReviewItem


logger = logging.getLogger(__name__)


def parse_line_number(raw: str) -> Optional[int]:
    """
    Parse a model-supplied line number.

    Returns:
        A strictly positive integer, or None if the value is not numeric,
        not finite, not integral, or not positive
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0 or not value.is_integer():
        return None
    return int(value)


class CommentMapper:
    """Converts review items of one file into CommentRecords."""

    def to_comments(self, diff_file: DiffFile, items: List[ReviewItem]) -> List[CommentRecord]:
        """
        Map review items onto comment records.

        Items with an unusable line number are dropped one by one; a file
        without a target path yields no comments at all.
        """
        if not diff_file.is_reviewable:
            return []

        comments = []
        for item in items:
            line = parse_line_number(item.line_number)
            if line is None:
                logger.debug(f"Dropping review item with invalid line number: {item.line_number!r}")
                continue

            comments.append(CommentRecord(body=item.review_comment, path=diff_file.target_path, line=line))

        return comments
