"""Content conversion module for Confluence storage format.

This module provides best-effort plain text and markdown views of
Confluence storage format (XHTML), plus size bounding for text handed
to downstream consumers.
"""

from .markup import (
    DEFAULT_MAX_LENGTH,
    extract_plain_text,
    optimize_for_ai,
    to_markdown,
    truncate,
)

__all__ = [
    'DEFAULT_MAX_LENGTH',
    'extract_plain_text',
    'optimize_for_ai',
    'to_markdown',
    'truncate',
]
