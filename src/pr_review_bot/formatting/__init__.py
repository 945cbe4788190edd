"""
Comment Formatting

Maps review items to GitHub inline review comments.
"""

from .github import CommentMapper, parse_line_number

__all__ = ['CommentMapper', 'parse_line_number']
