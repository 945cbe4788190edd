"""
Prompt Builder

Builds the system prompt (persona, rule precedence, output contract)
and the per-chunk user prompt for review generation.
"""

import logging
from typing import Dict

from ..language import LanguageProfile, get_language, DEFAULT_LANGUAGE
from ..models.pr_diff import DiffFile, DiffChunk, PRContext
from ..models.rules import RuleBundle


logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n...(truncated)"


def truncate(text: str, max_chars: int) -> str:
    """
    Truncate text for prompt inclusion.

    Args:
        text: Text to truncate
        max_chars: Maximum characters to keep; 0 or less drops the text

    Returns:
        The text unchanged when it fits, otherwise the first max_chars
        characters followed by the truncation marker
    """
    if not text:
        return ""
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + TRUNCATION_MARKER


class PromptBuilder:
    """
    Builds review prompts.

    The system prompt is built once per run from the rule bundle; the user
    prompt is built per diff chunk. Rule precedence (repo rules override
    common rules) is stated in the prompt text only.
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE, max_description_chars: int = 1500):
        """
        Initialize prompt builder.

        Args:
            language: Review output language ("korean", "english", ...)
            max_description_chars: PR description limit (0 drops the description)
        """
        self.profile: LanguageProfile = get_language(language)
        self.language = self.profile.name
        self.max_description_chars = max_description_chars

        # 한국어가 아니면 영어 지시문 템플릿에 출력 언어만 바꿔 사용
        templates = self._load_templates()
        self.template = templates["korean" if self.language == "korean" else "english"]

    def build_system_prompt(self, rules: RuleBundle) -> str:
        """
        Build the system prompt for a run.

        Args:
            rules: Common and repo-specific rule documents

        Returns:
            System prompt text
        """
        template = self.template

        if rules.has_repo_rules:
            priority_line = template["priority_repo_override"]
            repo_section = template["repo_rules_block"].format(repo_rules=rules.repo_rules.strip())
        else:
            priority_line = template["priority_common_only"]
            repo_section = ""

        return template["system_prompt"].format(
            language=self.profile.label,
            priority_line=priority_line,
            common_rules=rules.common_rules.strip() or "(none)",
            repo_section=repo_section,
        )

    def build_user_prompt(self, diff_file: DiffFile, chunk: DiffChunk, pr: PRContext) -> str:
        """
        Build the user prompt for one diff chunk.

        The chunk header is followed by a per-line listing of
        "<line number> <content>" so that comments can be anchored to
        new-file line numbers.
        """
        description = truncate(pr.description or "", self.max_description_chars)
        changes = "\n".join(f"{change.anchor} {change.content}" for change in chunk.changes)

        return self.template["user_prompt"].format(
            title=pr.title,
            description=description or self.template["description_placeholder"],
            path=diff_file.target_path,
            chunk_content=chunk.raw_content,
            changes=changes,
            language=self.profile.label,
        )

    def build_strict_system_prompt(self, system_prompt: str) -> str:
        """System prompt with the additional single-language clause for the re-ask."""
        return system_prompt + self.template["strict_language_clause"].format(language=self.profile.label)

    def _load_templates(self) -> Dict[str, Dict[str, str]]:
        """Load prompt templates for different languages."""
        return {
            "korean": {
                "system_prompt": """당신은 GitHub PR 코드리뷰 봇입니다. 모든 리뷰 코멘트는 반드시 **{language}**로 작성합니다.

규칙 우선순위:
{priority_line}

[공통 가이드라인]
---
{common_rules}
---
{repo_section}
작성 규칙:
- 반드시 아래 JSON만 출력: {{"reviews":[{{"lineNumber":<number>,"reviewComment":"<markdown, {language}>"}}]}}
- 공통규칙/레포 규칙 위반이 있으면 반드시 지적.
- 칭찬/긍정 코멘트 금지.
- 개선점이 없으면 reviews는 빈 배열([])로 반환.
- 각 리뷰는 반드시 diff의 특정 라인을 근거로 하며, 근거 없는 일반론은 금지.
- **코드에 주석 추가를 제안하지 않음.**
- lineNumber는 가능한 한 **새 파일 기준(추가/수정된 라인)** 번호로 지정.""",

                "priority_repo_override": "- 공통 가이드라인과 레포 특화 규칙이 충돌하면 **레포 특화 규칙이 우선(override)** 입니다.",

                "priority_common_only": "- 레포 특화 규칙이 없으므로 **공통 가이드라인만 적용**합니다.",

                "repo_rules_block": """
[레포 특화 규칙]
---
{repo_rules}
---
""",

                "user_prompt": """다음 PR 정보를 참고해서, 아래 diff를 리뷰해줘.

PR 제목: {title}
PR 설명:
---
{description}
---

대상 파일: {path}

diff:
```diff
{chunk_content}
{changes}
```

※ 출력은 반드시 {language}로만 작성하세요.
""",

                "description_placeholder": "(생략)",

                "strict_language_clause": """

[추가 강제 규칙]
- reviewComment는 반드시 {language} 문장만 사용한다.
- 영어 등 다른 언어 문장 작성은 금지한다. 필요하면 {language}로 풀어서 설명한다.
""",
            },

            "english": {
                "system_prompt": """You are a GitHub PR code review bot. Every review comment must be written in **{language}**.

Rule priority:
{priority_line}

[Common guidelines]
---
{common_rules}
---
{repo_section}
Output rules:
- Output only the following JSON: {{"reviews":[{{"lineNumber":<number>,"reviewComment":"<markdown, {language}>"}}]}}
- Always point out violations of the common guidelines or the repository rules.
- No praise or positive-only comments.
- If there is nothing to improve, return an empty reviews array ([]).
- Every review must be grounded in a specific line of the diff; no generic advice.
- **Never suggest adding comments to the code.**
- Use **new-file (added/modified line)** numbers for lineNumber wherever possible.""",

                "priority_repo_override": "- When the common guidelines and the repository rules conflict, **the repository rules take precedence (override)**.",

                "priority_common_only": "- There are no repository rules, so **common rules only** apply.",

                "repo_rules_block": """
[Repository rules]
---
{repo_rules}
---
""",

                "user_prompt": """Review the diff below using the following PR information.

PR title: {title}
PR description:
---
{description}
---

Target file: {path}

diff:
```diff
{chunk_content}
{changes}
```

Note: write the output in {language} only.
""",

                "description_placeholder": "(omitted)",

                "strict_language_clause": """

[Additional mandatory rules]
- reviewComment must use {language} sentences only.
- Sentences in any other language are not permitted. Rephrase in {language} when needed.
""",
            },
        }
