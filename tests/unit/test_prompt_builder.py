"""
Unit tests for prompt construction.
"""

import pytest

from pr_review_bot.llm.prompts import PromptBuilder, TRUNCATION_MARKER
from pr_review_bot.models.pr_diff import DiffFile, DiffChunk, DiffLine, PRContext
from pr_review_bot.models.rules import RuleBundle


def make_chunk():
    return DiffChunk(
        raw_content="@@ -1,3 +1,4 @@",
        changes=[
            DiffLine(new_line_number=1, old_line_number=1, content=" const a = 1;"),
            DiffLine(new_line_number=None, old_line_number=2, content="-const b = 2;"),
            DiffLine(new_line_number=2, old_line_number=None, content="+const b = 3;"),
            DiffLine(new_line_number=None, old_line_number=None, content="\\ No newline at end of file"),
        ],
    )


def make_pr(description="결제 모듈 리팩터링"):
    return PRContext(owner="octo", repo="demo", pull_number=7, title="결제 로직 정리", description=description)


class TestSystemPrompt:
    """Unit tests for the system prompt."""

    def test_common_rules_only(self):
        prompt = PromptBuilder().build_system_prompt(RuleBundle(common_rules="- 규칙 A", repo_rules=""))

        assert "공통 가이드라인만 적용" in prompt
        assert "[레포 특화 규칙]" not in prompt
        assert "우선(override)" not in prompt
        assert "- 규칙 A" in prompt

    def test_repo_rules_override(self):
        prompt = PromptBuilder().build_system_prompt(
            RuleBundle(common_rules="- 규칙 A", repo_rules="- 레포 규칙 B")
        )

        assert prompt.count("[레포 특화 규칙]") == 1
        assert "레포 특화 규칙이 우선(override)" in prompt
        assert "공통 가이드라인만 적용" not in prompt
        assert "- 레포 규칙 B" in prompt

    def test_blank_repo_rules_treated_as_absent(self):
        prompt = PromptBuilder().build_system_prompt(RuleBundle(common_rules="x", repo_rules="  \n "))
        assert "[레포 특화 규칙]" not in prompt

    def test_empty_common_rules_placeholder(self):
        prompt = PromptBuilder().build_system_prompt(RuleBundle())
        assert "(none)" in prompt

    def test_output_contract_and_policies(self):
        prompt = PromptBuilder().build_system_prompt(RuleBundle(common_rules="x"))

        assert '{"reviews":[{"lineNumber":<number>,"reviewComment":"<markdown, 한국어>"}]}' in prompt
        assert "칭찬/긍정 코멘트 금지" in prompt
        assert "빈 배열([])" in prompt
        assert "주석 추가를 제안하지 않음" in prompt
        assert "새 파일 기준" in prompt
        assert "**한국어**" in prompt

    def test_english_prompt(self):
        builder = PromptBuilder(language="english")

        common_only = builder.build_system_prompt(RuleBundle(common_rules="rule"))
        with_repo = builder.build_system_prompt(RuleBundle(common_rules="rule", repo_rules="repo rule"))

        assert "common rules only" in common_only
        assert "[Repository rules]" not in common_only
        assert with_repo.count("[Repository rules]") == 1
        assert "take precedence (override)" in with_repo

    def test_non_korean_language_uses_english_template(self):
        prompt = PromptBuilder(language="japanese").build_system_prompt(RuleBundle(common_rules="rule"))
        assert "**Japanese**" in prompt

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            PromptBuilder(language="klingon")


class TestUserPrompt:
    """Unit tests for the per-chunk user prompt."""

    def test_contains_pr_info_and_line_listing(self):
        prompt = PromptBuilder().build_user_prompt(DiffFile(target_path="src/app.ts"), make_chunk(), make_pr())

        assert "PR 제목: 결제 로직 정리" in prompt
        assert "결제 모듈 리팩터링" in prompt
        assert "대상 파일: src/app.ts" in prompt
        assert "```diff\n@@ -1,3 +1,4 @@\n" in prompt
        assert "\n1  const a = 1;\n" in prompt
        assert "\n2 -const b = 2;\n" in prompt
        assert "\n2 +const b = 3;\n" in prompt
        assert "\n \\ No newline at end of file\n" in prompt

    def test_ends_with_language_directive(self):
        prompt = PromptBuilder().build_user_prompt(DiffFile(target_path="a.py"), make_chunk(), make_pr())
        assert prompt.rstrip().endswith("※ 출력은 반드시 한국어로만 작성하세요.")

    def test_empty_description_placeholder(self):
        prompt = PromptBuilder().build_user_prompt(DiffFile(target_path="a.py"), make_chunk(), make_pr(""))
        assert "PR 설명:\n---\n(생략)\n---" in prompt

    def test_description_disabled(self):
        builder = PromptBuilder(max_description_chars=0)
        prompt = builder.build_user_prompt(DiffFile(target_path="a.py"), make_chunk(), make_pr("비공개 설명"))

        assert "비공개 설명" not in prompt
        assert "(생략)" in prompt

    def test_description_truncated(self):
        builder = PromptBuilder(max_description_chars=5)
        prompt = builder.build_user_prompt(DiffFile(target_path="a.py"), make_chunk(), make_pr("0123456789"))

        assert "01234" + TRUNCATION_MARKER in prompt
        assert "56789" not in prompt

    def test_english_placeholder(self):
        builder = PromptBuilder(language="english")
        prompt = builder.build_user_prompt(DiffFile(target_path="a.py"), make_chunk(), make_pr(""))

        assert "(omitted)" in prompt
        assert prompt.rstrip().endswith("write the output in English only.")


class TestStrictSystemPrompt:
    """Unit tests for the re-ask system prompt."""

    def test_appends_clause(self):
        builder = PromptBuilder()
        system = builder.build_system_prompt(RuleBundle(common_rules="x"))

        strict = builder.build_strict_system_prompt(system)

        assert strict.startswith(system)
        assert "[추가 강제 규칙]" in strict
        assert "한국어 문장만 사용" in strict
