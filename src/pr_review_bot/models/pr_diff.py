"""
PR Diff Data Models

Pull Request diff 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union


DEV_NULL = "/dev/null"


@dataclass
class DiffLine:
    """diff 청크의 개별 라인"""
    new_line_number: Optional[int]
    old_line_number: Optional[int]
    content: str

    def __post_init__(self):
        """데이터 검증"""
        for number in (self.new_line_number, self.old_line_number):
            if number is not None and number <= 0:
                raise ValueError("Line numbers must be positive")

    @property
    def anchor(self) -> Union[int, str]:
        """코멘트 위치 기준 라인 번호 (새 파일 우선, 없으면 이전 파일, 둘 다 없으면 빈 문자열)"""
        if self.new_line_number is not None:
            return self.new_line_number
        if self.old_line_number is not None:
            return self.old_line_number
        return ""


@dataclass
class DiffChunk:
    """PR diff의 개별 청크 (모델 호출 1회 단위)"""
    raw_content: str
    changes: List[DiffLine] = field(default_factory=list)


@dataclass
class DiffFile:
    """diff 내 파일 하나"""
    target_path: Optional[str]
    chunks: List[DiffChunk] = field(default_factory=list)

    @property
    def is_deleted(self) -> bool:
        """삭제된 파일 여부"""
        return self.target_path == DEV_NULL

    @property
    def is_reviewable(self) -> bool:
        """리뷰 대상 파일 여부 (경로가 있고 삭제되지 않은 파일)"""
        return bool(self.target_path) and not self.is_deleted


@dataclass(frozen=True)
class PRContext:
    """리뷰 대상 Pull Request 정보"""
    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""

    def __post_init__(self):
        """데이터 검증"""
        if self.pull_number <= 0:
            raise ValueError("PR number must be positive")
        if not self.owner or not self.repo:
            raise ValueError("Repository owner and name are required")

    @property
    def full_name(self) -> str:
        """owner/repo 형식 이름"""
        return f"{self.owner}/{self.repo}"
