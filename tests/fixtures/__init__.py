"""Test fixtures for the Confluence gateway.

This module provides test fixtures for:
- Sample Confluence XHTML bodies (with/without macros)
- Raw content API payloads and mock HTTP responses
"""

from .sample_pages import (
    SAMPLE_PAGE_SIMPLE,
    SAMPLE_PAGE_WITH_MACROS,
    SAMPLE_PAGE_INLINE,
    SAMPLE_PAGE_WITH_ENTITIES,
)
from .confluence_payloads import (
    make_attachment_payload,
    make_comment_payload,
    make_http_client,
    make_page_payload,
    make_response,
    make_space_payload,
    make_user,
)

__all__ = [
    "SAMPLE_PAGE_SIMPLE",
    "SAMPLE_PAGE_WITH_MACROS",
    "SAMPLE_PAGE_INLINE",
    "SAMPLE_PAGE_WITH_ENTITIES",
    "make_attachment_payload",
    "make_comment_payload",
    "make_http_client",
    "make_page_payload",
    "make_response",
    "make_space_payload",
    "make_user",
]
