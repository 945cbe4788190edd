"""
Rule Resolver

공통 가이드라인(액션 레포 내부)과 레포 특화 규칙(대상 레포 내부)을 읽어
RuleBundle로 묶는다. 우선순위는 프롬프트에서 선언적으로 표현되며
여기서는 병합하지 않는다.
"""

import logging
from pathlib import Path
from typing import Union

from ..config import RulesConfig
from ..models.rules import RuleBundle


logger = logging.getLogger(__name__)


def safe_read_file(file_path: Union[str, Path]) -> str:
    """
    파일을 읽어 앞뒤 공백을 제거해 반환. 파일이 없거나 읽을 수 없으면 빈 문자열.
    """
    path = Path(file_path)
    try:
        if not path.is_file():
            logger.debug(f"Rule file not found: {path}")
            return ""
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read rule file {path}: {e}")
        return ""


class RuleResolver:
    """규칙 문서 로더"""

    def __init__(self, config: RulesConfig):
        self.config = config

    @property
    def common_rules_file(self) -> Path:
        """액션 루트 기준 공통 가이드라인 경로"""
        return (Path(self.config.action_path) / self.config.common_rules_path).resolve()

    @property
    def repo_rules_file(self) -> Path:
        """체크아웃된 워크스페이스 기준 레포 특화 규칙 경로"""
        return (Path(self.config.workspace) / self.config.repo_rules_path).resolve()

    def load_rules(self) -> RuleBundle:
        """두 규칙 문서를 읽어 RuleBundle 생성"""
        rules = RuleBundle(
            common_rules=safe_read_file(self.common_rules_file),
            repo_rules=safe_read_file(self.repo_rules_file),
        )

        if not rules.has_repo_rules:
            logger.info("Repo rules not found; using common rules only.")

        logger.info(f"COMMON_RULES loaded: {'YES' if rules.has_common_rules else 'NO'}")
        logger.info(f"REPO_RULES loaded: {'YES' if rules.has_repo_rules else 'NO'}")
        return rules
