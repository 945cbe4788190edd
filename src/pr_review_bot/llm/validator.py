"""
Review Validator

Parses model output into review items and enforces the single output
language. A non-compliant answer triggers exactly one re-ask with a
stricter system prompt; the re-ask result is used as-is.
"""

import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from ..language import LanguageProfile
from ..models.review import ReviewItem, ReviewOutcome, ReviewResponsePayload
from .client import CompletionClient, CompletionError
from .prompts import PromptBuilder


logger = logging.getLogger(__name__)


def parse_reviews(raw: str) -> List[ReviewItem]:
    """
    Parse a model response body.

    Anything other than {"reviews": [...]} yields an empty list.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Model response is not valid JSON; treating as no reviews")
        return []

    if not isinstance(data, dict):
        return []

    try:
        payload = ReviewResponsePayload.model_validate(data)
    except ValidationError:
        logger.warning("Model response has no reviews array; treating as no reviews")
        return []

    return payload.to_items()


def is_compliant(items: List[ReviewItem], profile: LanguageProfile) -> bool:
    """Every non-blank comment must contain a character of the target script."""
    for item in items:
        comment = item.review_comment.strip()
        if comment and not profile.matches(comment):
            return False
    return True


class ReviewValidator:
    """
    Requests reviews for one chunk and validates the output language.
    """

    def __init__(self, completion_client: CompletionClient, prompt_builder: PromptBuilder):
        self.completion_client = completion_client
        self.prompt_builder = prompt_builder
        self.profile = prompt_builder.profile

    def _request(self, system_prompt: str, user_prompt: str) -> List[ReviewItem]:
        raw = self.completion_client.complete(system_prompt, user_prompt)
        return parse_reviews(raw)

    def review(self, system_prompt: str, user_prompt: str) -> ReviewOutcome:
        """
        Get validated reviews for one chunk.

        Returns:
            ReviewOutcome: success/empty with the items, or error when a
            completion request failed
        """
        retried = False
        try:
            items = self._request(system_prompt, user_prompt)

            if not is_compliant(items, self.profile):
                logger.info(f"Non-{self.profile.name} response detected. Retrying once with stricter rule.")
                retried = True
                stricter_system = self.prompt_builder.build_strict_system_prompt(system_prompt)
                items = self._request(stricter_system, user_prompt)

                if not is_compliant(items, self.profile):
                    logger.warning("Retry response is still not compliant; using it as-is")

        except CompletionError as e:
            logger.error(f"OpenAI error: {e}")
            return ReviewOutcome.failed(str(e), retried=retried)

        return ReviewOutcome.from_items(items, retried=retried)

    def get_reviews(self, system_prompt: str, user_prompt: str) -> Optional[List[ReviewItem]]:
        """Review items for one chunk, or None if the chunk must be skipped."""
        return self.review(system_prompt, user_prompt).reviews
