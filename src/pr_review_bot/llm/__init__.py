"""
LLM Review Engine

This module provides prompt construction, the chat completion client
and language-compliance validation of model output.
"""

from .prompts import PromptBuilder, truncate
from .client import CompletionClient, CompletionError
from .validator import ReviewValidator

__all__ = ['PromptBuilder', 'truncate', 'CompletionClient', 'CompletionError', 'ReviewValidator']
