"""Utility modules for texfmt.

Provides:
- text: comment-aware escaping of LaTeX special characters
- logger: get_logger for logging
"""

from texfmt.utils.logger import get_logger
from texfmt.utils.text import escape_preserving_comments, escape_specials, find_comment_start

__all__ = [
    "escape_preserving_comments",
    "escape_specials",
    "find_comment_start",
    "get_logger",
]
