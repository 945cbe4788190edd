"""
Rule Data Models

리뷰 규칙 관련 데이터 모델
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleBundle:
    """공통 가이드라인 + 레포 특화 규칙 묶음

    충돌 시 레포 특화 규칙이 우선한다는 정책은 프롬프트 문구로만 전달되며,
    텍스트를 병합하지는 않는다.
    """
    common_rules: str = ""
    repo_rules: str = ""

    @property
    def has_common_rules(self) -> bool:
        return bool(self.common_rules.strip())

    @property
    def has_repo_rules(self) -> bool:
        return bool(self.repo_rules.strip())
