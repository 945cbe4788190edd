"""
GitHub Integration Layer

This module provides GitHub API integration for PR metadata, diff
retrieval, diff parsing and review submission.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .parser import PRDiffParser, DiffParseError

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'PRDiffParser', 'DiffParseError']
