"""Best-effort text views of Confluence storage format.

This module turns Confluence storage format (XHTML) into plain text or
markdown and bounds the size of text handed to downstream consumers.
All functions are pure and tolerate malformed markup: output on broken or
deeply nested input is visually reasonable but not byte-exact.

Markdown conversion folds the parsed element tree with markdownify instead
of applying regex passes in sequence, so a tag nested inside another is
rendered the same regardless of which pattern would have matched first.
"""

import re
from functools import partialmethod
from typing import Optional

from markdownify import MarkdownConverter as BaseMarkdownConverter

DEFAULT_MAX_LENGTH = 8000
ELLIPSIS = '...'

# Tags with a markdown rendering; everything else is stripped to its text
CONVERTED_TAGS = [
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'p', 'br',
    'strong', 'b', 'em', 'i',
    'a',
    'ul', 'ol', 'li',
]

_TAG_RE = re.compile(r'<[^>]*>')
_ENTITY_RE = re.compile(r'&(?:[a-zA-Z][a-zA-Z0-9]*|#[0-9]+|#[xX][0-9a-fA-F]+);')
_WHITESPACE_RE = re.compile(r'\s+')
_BLANK_LINES_RE = re.compile(r'\n\s*\n')


class _StorageMarkdownConverter(BaseMarkdownConverter):
    """markdownify converter producing the compact markdown agents consume."""

    def __init__(self, **options):
        options.setdefault('heading_style', 'atx')
        options.setdefault('bullets', '-')
        options.setdefault('strong_em_symbol', '*')
        options.setdefault('escape_asterisks', False)
        options.setdefault('escape_underscores', False)
        options.setdefault('convert', CONVERTED_TAGS)
        super().__init__(**options)

    def _convert_hn(self, n, el, text, parent_tags):
        """Render a heading as a single `#` line."""
        text = text.strip()
        if not text:
            return ''
        if '_inline' in parent_tags:
            return text
        level = max(1, min(6, n))
        return '\n%s %s\n' % ('#' * level, text)

    convert_h1 = partialmethod(_convert_hn, 1)
    convert_h2 = partialmethod(_convert_hn, 2)
    convert_h3 = partialmethod(_convert_hn, 3)
    convert_h4 = partialmethod(_convert_hn, 4)
    convert_h5 = partialmethod(_convert_hn, 5)
    convert_h6 = partialmethod(_convert_hn, 6)

    def convert_p(self, el, text, parent_tags):
        """Paragraphs end with a blank line, except inside list items."""
        text = text.strip()
        if not text:
            return ''
        if '_inline' in parent_tags:
            return ' ' + text + ' '
        if 'li' in parent_tags:
            return text + '\n'
        return text + '\n\n'

    def convert_a(self, el, text, parent_tags):
        href = el.get('href')
        if not href:
            return text
        return '[%s](%s)' % (text.strip(), href)

    def convert_li(self, el, text, parent_tags):
        text = (text or '').strip()
        if not text:
            return ''
        return '- %s\n' % text

    def convert_ul(self, el, text, parent_tags):
        # Ordered and unordered lists share the `- item` rendering
        if '_inline' in parent_tags:
            return ' ' + text.strip() + ' '
        return '\n' + text + '\n'

    convert_ol = convert_ul


def extract_plain_text(markup: Optional[str]) -> str:
    """Strip storage markup down to a single line of plain text.

    Tags and HTML entities are replaced by spaces, whitespace runs are
    collapsed to a single space and the result is trimmed.

    Args:
        markup: Confluence storage format string (may be None)

    Returns:
        Plain text, or an empty string for empty input

    Example:
        >>> extract_plain_text("<p>This is <strong>bold</strong></p>")
        'This is bold'
    """
    if not markup:
        return ''

    text = _TAG_RE.sub(' ', markup)
    text = _ENTITY_RE.sub(' ', text)
    text = _WHITESPACE_RE.sub(' ', text)
    return text.strip()


def truncate(text: Optional[str], max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Bound text to max_length characters, preferring a word boundary.

    Text that already fits is returned unchanged. Otherwise the text is cut
    at the last whitespace that leaves room for the ellipsis marker, and the
    marker is appended. Without such whitespace, or when only whitespace
    precedes it, the text is hard-cut at max_length and no marker is added.
    The result never exceeds max_length, which makes the function idempotent.

    Args:
        text: Text to bound (may be None)
        max_length: Maximum number of characters to keep

    Returns:
        The bounded text
    """
    if not text:
        return ''
    if len(text) <= max_length:
        return text

    limit = max_length - len(ELLIPSIS)
    break_point = -1
    if limit > 0:
        window = text[:limit + 1]
        break_point = max(window.rfind(ch) for ch in (' ', '\n', '\t'))

    if break_point <= 0 or not text[:break_point].rstrip():
        return text[:max_length]

    return text[:break_point].rstrip() + ELLIPSIS


def optimize_for_ai(text: Optional[str]) -> str:
    """Bound text for an agent's context window.

    Currently a plain truncation with the default limit.
    """
    return truncate(text)


def to_markdown(markup: Optional[str]) -> str:
    """Convert Confluence storage format to markdown.

    Headings become `#` lines, paragraphs are followed by a blank line,
    bold/italic (both semantic and presentational tags) become `**`/`*`,
    links become `[text](href)` and list items become `- item` lines.
    Unrecognized tags are stripped, runs of blank lines collapse to one and
    the result is trimmed.

    Args:
        markup: Confluence storage format string (may be None)

    Returns:
        Markdown string, or an empty string for empty input

    Example:
        >>> to_markdown("<h1>Title</h1><p>Hello <strong>world</strong></p>")
        '# Title\\nHello **world**'
    """
    if not markup:
        return ''

    markdown = _StorageMarkdownConverter().convert(markup)
    markdown = _BLANK_LINES_RE.sub('\n\n', markdown)
    return markdown.strip()
