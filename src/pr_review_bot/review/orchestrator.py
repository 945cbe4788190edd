"""
Review Orchestrator

Drives one review run: acquire the diff for the triggering event,
filter files, load rules, review every chunk sequentially and submit
all comments as a single review.
"""

import logging
from typing import List, Optional

from ..config import AppConfig
from ..formatting.github import CommentMapper
from ..github.client import GitHubClient
from ..github.parser import PRDiffParser
from ..llm.client import CompletionClient
from ..llm.prompts import PromptBuilder
from ..llm.validator import ReviewValidator
from ..models.event import PullRequestEvent
from ..models.pr_diff import DiffFile, PRContext
from ..models.review import CommentRecord, ReviewRunResult, ReviewStatus, RunState
from ..models.rules import RuleBundle
from ..rules.resolver import RuleResolver


logger = logging.getLogger(__name__)


class ReviewOrchestrator:
    """
    Runs the diff-to-comment pipeline for one pull request event.

    Chunks are reviewed one at a time in diff order; the comment list is
    owned by the run and only appended to.
    """

    def __init__(
        self,
        config: AppConfig,
        github_client: GitHubClient,
        completion_client: CompletionClient,
        diff_parser: Optional[PRDiffParser] = None,
        rule_resolver: Optional[RuleResolver] = None,
        comment_mapper: Optional[CommentMapper] = None,
    ):
        self.config = config
        self.github_client = github_client
        self.diff_parser = diff_parser or PRDiffParser()
        self.rule_resolver = rule_resolver or RuleResolver(config.rules)
        self.comment_mapper = comment_mapper or CommentMapper()
        self.prompt_builder = PromptBuilder(
            language=config.review.language,
            max_description_chars=config.review.max_description_chars,
        )
        self.validator = ReviewValidator(completion_client, self.prompt_builder)
        self.state = RunState.INIT

    @classmethod
    def from_config(cls, config: AppConfig) -> "ReviewOrchestrator":
        """Create orchestrator with real GitHub and OpenAI clients."""
        return cls(
            config,
            github_client=GitHubClient.from_config(config.github),
            completion_client=CompletionClient(config.llm),
        )

    def _transition(self, state: RunState) -> None:
        logger.debug(f"Run state: {self.state.value} -> {state.value}")
        self.state = state

    def _skip(self, reason: str) -> ReviewRunResult:
        self._transition(RunState.SKIPPED)
        return ReviewRunResult(state=RunState.SKIPPED, reason=reason)

    def run(self, event: PullRequestEvent) -> ReviewRunResult:
        """
        Execute one review run.

        Args:
            event: Triggering pull_request event payload

        Returns:
            ReviewRunResult describing the terminal state

        Raises:
            GitHubAPIError: When PR metadata, diff or review submission fails
            DiffParseError: When the diff cannot be parsed
        """
        self.state = RunState.INIT

        if not (event.is_opened or event.is_synchronize):
            logger.info(f"Unsupported event: {self.config.github.event_name or '-'} (action={event.action})")
            return self._skip("unsupported_event")

        pr = self.fetch_pr_context(event)
        logger.info(f"Reviewing {pr.full_name}#{pr.pull_number} (action={event.action})")
        diff_text = self.fetch_diff(event, pr)
        self._transition(RunState.DIFF_ACQUIRED)

        if not diff_text:
            logger.info("No diff found")
            return self._skip("no_diff")

        parsed_files = self.diff_parser.parse(diff_text)
        files = self.diff_parser.filter_files(parsed_files, self.config.review.exclude_patterns)
        self._transition(RunState.DIFF_FILTERED)

        rules = self.rule_resolver.load_rules()
        self._transition(RunState.RULES_LOADED)
        self._log_run_settings()

        self._transition(RunState.REVIEWING)
        result = self.analyze_code(files, pr, rules)
        self._transition(RunState.AGGREGATED)

        if not result.comments:
            logger.info("No review comments generated; skipping review submission")
            self._transition(RunState.SKIPPED)
            result.state = RunState.SKIPPED
            result.reason = "no_comments"
            return result

        self.github_client.create_review(pr.owner, pr.repo, pr.pull_number, result.comments)
        self._transition(RunState.SUBMITTED)
        result.state = RunState.SUBMITTED
        logger.info(f"Submitted review with {result.total_comments} comments to {pr.full_name}#{pr.pull_number}")
        return result

    def fetch_pr_context(self, event: PullRequestEvent) -> PRContext:
        """Fetch PR title and body once for the run."""
        pr_data = self.github_client.get_pull_request(event.owner, event.repo, event.number)
        return PRContext(
            owner=event.owner,
            repo=event.repo,
            pull_number=event.number,
            title=pr_data.get("title") or "",
            description=pr_data.get("body") or "",
        )

    def fetch_diff(self, event: PullRequestEvent, pr: PRContext) -> str:
        """Full PR diff for "opened", incremental before...after diff for "synchronize"."""
        if event.is_synchronize:
            if not event.before or not event.after:
                raise ValueError("synchronize event requires before/after commits")
            return self.github_client.compare_commits_diff(pr.owner, pr.repo, event.before, event.after)

        return self.github_client.get_pull_request_diff(pr.owner, pr.repo, pr.pull_number)

    def analyze_code(self, files: List[DiffFile], pr: PRContext, rules: RuleBundle) -> ReviewRunResult:
        """
        Review every chunk of every retained file in order.

        A chunk whose review failed or came back empty contributes no
        comments; the loop always continues.
        """
        comments: List[CommentRecord] = []
        chunks_reviewed = 0
        chunks_failed = 0

        system_prompt = self.prompt_builder.build_system_prompt(rules)

        for diff_file in files:
            if diff_file.is_deleted:
                continue

            for chunk in diff_file.chunks:
                user_prompt = self.prompt_builder.build_user_prompt(diff_file, chunk, pr)
                outcome = self.validator.review(system_prompt, user_prompt)
                chunks_reviewed += 1

                if outcome.status == ReviewStatus.ERROR:
                    chunks_failed += 1
                    continue

                new_comments = self.comment_mapper.to_comments(diff_file, outcome.items)
                logger.debug(f"{diff_file.target_path} {chunk.raw_content}: {len(new_comments)} comments")
                comments.extend(new_comments)

        logger.info(
            f"Reviewed {chunks_reviewed} chunks in {len(files)} files "
            f"({chunks_failed} failed): {len(comments)} comments"
        )
        return ReviewRunResult(
            state=RunState.AGGREGATED,
            comments=comments,
            files_reviewed=len(files),
            chunks_reviewed=chunks_reviewed,
            chunks_failed=chunks_failed,
        )

    def _log_run_settings(self) -> None:
        rules_config = self.config.rules
        logger.info(f"GITHUB_WORKSPACE: {rules_config.workspace or '(empty)'}")
        logger.info(f"COMMON_RULES_PATH: {rules_config.common_rules_path}")
        logger.info(f"REPO_RULES_PATH: {rules_config.repo_rules_path}")
        logger.info(f"MAX_PR_DESCRIPTION_CHARS: {self.config.review.max_description_chars}")
        logger.info(f"REVIEW_LANGUAGE: {self.config.review.language}")
        logger.info(f"MODEL: {self.config.llm.model}")
