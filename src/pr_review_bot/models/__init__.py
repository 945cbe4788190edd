"""
Data Models

PR 리뷰 봇의 핵심 데이터 모델들
"""

from .pr_diff import DiffLine, DiffChunk, DiffFile, PRContext
from .rules import RuleBundle
from .review import (
    ReviewItem,
    CommentRecord,
    ReviewStatus,
    ReviewOutcome,
    RunState,
    ReviewRunResult,
)
from .event import PullRequestEvent, load_event

__all__ = [
    "DiffLine",
    "DiffChunk",
    "DiffFile",
    "PRContext",
    "RuleBundle",
    "ReviewItem",
    "CommentRecord",
    "ReviewStatus",
    "ReviewOutcome",
    "RunState",
    "ReviewRunResult",
    "PullRequestEvent",
    "load_event",
]
