"""
Review Language Profiles

리뷰 코멘트를 강제할 자연어와 해당 문자 범위 검출기
"""

import re
from dataclasses import dataclass
from typing import Dict, Pattern


@dataclass(frozen=True)
class LanguageProfile:
    """리뷰 출력 언어 정의"""
    name: str
    label: str
    script_pattern: Pattern[str]

    def matches(self, text: str) -> bool:
        """대상 문자 범위의 문자가 하나라도 있는지 확인"""
        return bool(self.script_pattern.search(text))


LANGUAGES: Dict[str, LanguageProfile] = {
    "korean": LanguageProfile("korean", "한국어", re.compile(r"[가-힣]")),
    "english": LanguageProfile("english", "English", re.compile(r"[A-Za-z]")),
    "japanese": LanguageProfile("japanese", "Japanese", re.compile(r"[぀-ヿ一-鿿]")),
}

DEFAULT_LANGUAGE = "korean"


def get_language(name: str) -> LanguageProfile:
    """
    Look up a language profile by name.

    Raises:
        ValueError: If the language is not supported
    """
    profile = LANGUAGES.get((name or "").strip().lower())
    if profile is None:
        raise ValueError(f"Unsupported review language: {name}")
    return profile
