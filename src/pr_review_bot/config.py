"""
Configuration Management

실행 설정 관리. 프로세스 시작 시 한 번 생성되어 각 컴포넌트에 전달된다.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping, Tuple
from pathlib import Path
import logging

from .language import LANGUAGES, DEFAULT_LANGUAGE


PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_COMMON_RULES_PATH = "rules/common.md"
DEFAULT_REPO_RULES_PATH = ".github/ai-review/rules.md"
DEFAULT_MAX_DESCRIPTION_CHARS = 1500
CONFIG_PATH_ENV = "PR_REVIEW_BOT_CONFIG"


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30
    event_path: Optional[str] = None
    event_name: str = ""


@dataclass
class LLMConfig:
    """OpenAI Chat Completions 설정"""
    api_key: Optional[str] = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.1
    max_tokens: int = 700
    timeout_seconds: float = 60.0


@dataclass
class RulesConfig:
    """규칙 문서 경로 설정"""
    common_rules_path: str = DEFAULT_COMMON_RULES_PATH
    repo_rules_path: str = DEFAULT_REPO_RULES_PATH
    action_path: str = str(PROJECT_ROOT)
    workspace: str = field(default_factory=os.getcwd)


@dataclass
class ReviewConfig:
    """리뷰 생성 설정"""
    language: str = DEFAULT_LANGUAGE
    max_description_chars: int = DEFAULT_MAX_DESCRIPTION_CHARS
    exclude_patterns: Tuple[str, ...] = ()


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


def parse_exclude_patterns(raw: Optional[str]) -> Tuple[str, ...]:
    """콤마로 구분된 glob 목록 파싱 (공백 제거, 빈 항목 제외)"""
    if not raw:
        return ()
    return tuple(p.strip() for p in raw.split(",") if p.strip())


def parse_max_description_chars(raw: Optional[str]) -> int:
    """PR 설명 최대 글자수 파싱. 잘못된 값이나 음수는 기본값"""
    if raw is None or not str(raw).strip():
        return DEFAULT_MAX_DESCRIPTION_CHARS
    try:
        value = int(str(raw).strip())
    except ValueError:
        return DEFAULT_MAX_DESCRIPTION_CHARS
    return value if value >= 0 else DEFAULT_MAX_DESCRIPTION_CHARS


def _input(env: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    """GitHub Actions input (INPUT_<NAME>) 조회. 빈 값은 기본값으로 취급"""
    value = env.get(f"INPUT_{name.upper()}", "")
    return value if value.strip() else default


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig
    llm: LLMConfig
    rules: RulesConfig
    review: ReviewConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """GitHub Actions 환경 변수에서 설정 로드"""
        env = os.environ if environ is None else environ

        return cls(
            github=GitHubConfig(
                token=_input(env, "GITHUB_TOKEN", env.get("GITHUB_TOKEN")),
                api_base_url=env.get("GITHUB_API_URL") or "https://api.github.com",
                timeout_seconds=int(_input(env, "GITHUB_TIMEOUT", "30")),
                event_path=env.get("GITHUB_EVENT_PATH") or None,
                event_name=env.get("GITHUB_EVENT_NAME", ""),
            ),
            llm=LLMConfig(
                api_key=_input(env, "OPENAI_API_KEY", env.get("OPENAI_API_KEY")),
                model=_input(env, "OPENAI_API_MODEL", "gpt-4o-mini"),
                temperature=float(_input(env, "OPENAI_TEMPERATURE", "0.1")),
                max_tokens=int(_input(env, "OPENAI_MAX_TOKENS", "700")),
                timeout_seconds=float(_input(env, "OPENAI_TIMEOUT", "60")),
            ),
            rules=RulesConfig(
                common_rules_path=_input(env, "COMMON_RULES_PATH", DEFAULT_COMMON_RULES_PATH),
                repo_rules_path=_input(env, "REPO_RULES_PATH", DEFAULT_REPO_RULES_PATH),
                action_path=env.get("GITHUB_ACTION_PATH") or str(PROJECT_ROOT),
                workspace=env.get("GITHUB_WORKSPACE") or os.getcwd(),
            ),
            review=ReviewConfig(
                language=_input(env, "REVIEW_LANGUAGE", DEFAULT_LANGUAGE).strip().lower(),
                max_description_chars=parse_max_description_chars(
                    _input(env, "MAX_PR_DESCRIPTION_CHARS")
                ),
                exclude_patterns=parse_exclude_patterns(_input(env, "EXCLUDE", "")),
            ),
            logging=LoggingConfig(
                level=_input(env, "LOG_LEVEL", "INFO"),
                format=env.get("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=env.get("LOG_FILE") or None,
            ),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드 (로컬 실행용)"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        review_data = dict(config_data.get('review', {}))
        if 'exclude_patterns' in review_data:
            patterns = review_data['exclude_patterns']
            if isinstance(patterns, str):
                review_data['exclude_patterns'] = parse_exclude_patterns(patterns)
            else:
                review_data['exclude_patterns'] = tuple(str(p) for p in patterns or ())

        return cls(
            github=GitHubConfig(**config_data.get('github', {})),
            llm=LLMConfig(**config_data.get('llm', {})),
            rules=RulesConfig(**config_data.get('rules', {})),
            review=ReviewConfig(**review_data),
            logging=LoggingConfig(**config_data.get('logging', {})),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if not self.github.token:
            errors.append("GitHub token is required")

        if not self.llm.api_key:
            errors.append("OpenAI API key is required")

        if not self.llm.model:
            errors.append("OpenAI model is required")

        if self.llm.max_tokens <= 0:
            errors.append("max_tokens must be positive")

        if self.review.language not in LANGUAGES:
            errors.append(f"Unsupported review language: {self.review.language}")

        if self.review.max_description_chars < 0:
            errors.append("max_description_chars must be non-negative")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                'event_path': self.github.event_path,
                'event_name': self.github.event_name,
                # 보안상 토큰은 제외
            },
            'llm': {
                'model': self.llm.model,
                'temperature': self.llm.temperature,
                'max_tokens': self.llm.max_tokens,
                'timeout_seconds': self.llm.timeout_seconds,
            },
            'rules': {
                'common_rules_path': self.rules.common_rules_path,
                'repo_rules_path': self.rules.repo_rules_path,
                'action_path': self.rules.action_path,
                'workspace': self.rules.workspace,
            },
            'review': {
                'language': self.review.language,
                'max_description_chars': self.review.max_description_chars,
                'exclude_patterns': list(self.review.exclude_patterns),
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
        }


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    실행 설정 로드.

    PR_REVIEW_BOT_CONFIG 가 YAML 파일을 가리키면 그 파일을 사용하고(로컬 실행),
    아니면 GitHub Actions 환경 변수를 사용한다. YAML에 이벤트 경로가 없으면
    GITHUB_EVENT_PATH 를 따른다.
    """
    env = os.environ if environ is None else environ

    config_path = env.get(CONFIG_PATH_ENV, "").strip()
    if not config_path:
        return AppConfig.from_env(env)

    config = AppConfig.from_yaml(config_path)
    if not config.github.event_path:
        config.github.event_path = env.get("GITHUB_EVENT_PATH") or None
    return config


def setup_logging(config: LoggingConfig) -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    # 파일 로깅이 설정된 경우 로테이션 설정
    if config.file_path:
        from logging.handlers import RotatingFileHandler

        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))
        logging.getLogger().addHandler(handler)
