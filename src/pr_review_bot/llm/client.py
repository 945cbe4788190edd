"""
Completion Client

Single-request wrapper around the OpenAI Chat Completions API.
The response is forced to a JSON object.
"""

import logging
from typing import Optional

import openai
from openai import OpenAI

from ..config import LLMConfig


logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Transport or protocol level failure of a completion request."""


class CompletionClient:
    """
    Chat completion client for review generation.

    One call is one request; retries are left to the caller.
    """

    def __init__(self, config: LLMConfig, client: Optional[OpenAI] = None):
        """
        Initialize completion client.

        Args:
            config: Model, sampling and timeout settings
            client: Preconfigured OpenAI client (created from config if omitted)
        """
        self.config = config
        self.client = client or OpenAI(
            api_key=config.api_key,
            timeout=config.timeout_seconds,
            max_retries=0,
        )

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Request one completion.

        Args:
            system_prompt: System message
            user_prompt: User message

        Returns:
            Stripped message content, or "{}" when the message is empty

        Raises:
            CompletionError: On API errors or a response without choices
        """
        try:
            response = self.client.chat.completions.create(
                model=self.config.model,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            raise CompletionError(f"Chat completion failed: {e}") from e

        choices = getattr(response, "choices", None)
        if not choices:
            raise CompletionError("Chat completion returned no choices")

        message = choices[0].message
        content = (getattr(message, "content", None) or "").strip()
        return content or "{}"
