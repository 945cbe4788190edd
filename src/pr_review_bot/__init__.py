"""
PR Review Bot

GitHub Pull Request diff를 청크 단위로 리뷰하고 인라인 코멘트를 남기는 액션
"""

__version__ = "1.0.0"

from .review.orchestrator import ReviewOrchestrator

__all__ = ["ReviewOrchestrator"]
