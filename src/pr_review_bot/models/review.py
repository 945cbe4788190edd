"""
Review Data Models

코드 리뷰 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, field_validator


@dataclass
class ReviewItem:
    """모델이 반환한 리뷰 단위 (검증/매핑 전)"""
    line_number: str
    review_comment: str

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ReviewItem":
        """모델 응답의 reviews 원소에서 생성"""
        raw_line = payload.get("lineNumber")
        raw_comment = payload.get("reviewComment")
        return cls(
            line_number="" if raw_line is None else str(raw_line),
            review_comment="" if raw_comment is None else str(raw_comment),
        )


@dataclass
class CommentRecord:
    """GitHub PR 리뷰 코멘트 형식"""
    body: str
    path: str
    line: int

    def __post_init__(self):
        """데이터 검증"""
        if isinstance(self.line, bool) or not isinstance(self.line, int):
            raise ValueError("Line number must be an integer")
        if self.line <= 0:
            raise ValueError("Line number must be positive")
        if not self.path:
            raise ValueError("Comment path cannot be empty")

    def to_payload(self) -> Dict[str, Any]:
        """GitHub API 요청 형식으로 변환"""
        return {"body": self.body, "path": self.path, "line": self.line}


class ReviewStatus(str, Enum):
    """청크 단위 리뷰 결과 상태"""
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class ReviewOutcome:
    """청크 리뷰 결과 (성공/빈 결과/오류)"""
    status: ReviewStatus
    items: List[ReviewItem] = field(default_factory=list)
    retried: bool = False
    error: Optional[str] = None

    @classmethod
    def from_items(cls, items: List[ReviewItem], retried: bool = False) -> "ReviewOutcome":
        status = ReviewStatus.SUCCESS if items else ReviewStatus.EMPTY
        return cls(status=status, items=list(items), retried=retried)

    @classmethod
    def failed(cls, error: str, retried: bool = False) -> "ReviewOutcome":
        return cls(status=ReviewStatus.ERROR, retried=retried, error=error)

    @property
    def reviews(self) -> Optional[List[ReviewItem]]:
        """오류면 None, 아니면 리뷰 목록"""
        if self.status == ReviewStatus.ERROR:
            return None
        return self.items


class RunState(str, Enum):
    """리뷰 실행 상태"""
    INIT = "init"
    DIFF_ACQUIRED = "diff_acquired"
    DIFF_FILTERED = "diff_filtered"
    RULES_LOADED = "rules_loaded"
    REVIEWING = "reviewing"
    AGGREGATED = "aggregated"
    SUBMITTED = "submitted"
    SKIPPED = "skipped"


@dataclass
class ReviewRunResult:
    """리뷰 실행 전체 결과"""
    state: RunState
    comments: List[CommentRecord] = field(default_factory=list)
    files_reviewed: int = 0
    chunks_reviewed: int = 0
    chunks_failed: int = 0
    reason: Optional[str] = None

    @property
    def submitted(self) -> bool:
        return self.state == RunState.SUBMITTED

    @property
    def total_comments(self) -> int:
        return len(self.comments)


# Pydantic models for model response validation
class ReviewResponsePayload(BaseModel):
    """모델 응답 JSON 형식: {"reviews": [...]}"""
    model_config = ConfigDict(extra="ignore")

    reviews: List[Any]

    @field_validator("reviews", mode="before")
    @classmethod
    def validate_reviews(cls, v):
        if not isinstance(v, list):
            raise ValueError("reviews must be an array")
        return v

    def to_items(self) -> List[ReviewItem]:
        """객체가 아닌 원소는 건너뜀"""
        return [ReviewItem.from_payload(entry) for entry in self.reviews if isinstance(entry, dict)]
