"""Unit tests for content_converter.markup module."""

import pytest

from src.content_converter.markup import (
    DEFAULT_MAX_LENGTH,
    extract_plain_text,
    optimize_for_ai,
    to_markdown,
    truncate,
)
from tests.fixtures.sample_pages import (
    SAMPLE_PAGE_INLINE,
    SAMPLE_PAGE_SIMPLE,
    SAMPLE_PAGE_WITH_ENTITIES,
    SAMPLE_PAGE_WITH_MACROS,
)


class TestExtractPlainText:
    """Test cases for extract_plain_text."""

    def test_strips_tags(self):
        """Tags are removed and inline text is kept in order."""
        html = '<p>This is <strong>bold</strong> and <em>italic</em> text.</p>'
        assert extract_plain_text(html) == 'This is bold and italic text.'

    def test_replaces_entities_with_spaces(self):
        """Named entities become whitespace rather than decoded characters."""
        assert extract_plain_text('<p>This &amp; that &lt;tag&gt;</p>') == 'This that tag'

    def test_replaces_numeric_entities(self):
        """Decimal and hexadecimal character references are removed too."""
        assert extract_plain_text(SAMPLE_PAGE_WITH_ENTITIES) == 'Fish chips 2024 done'

    def test_normalizes_whitespace(self):
        html = '<div>  Multiple    spaces   </div>\n<p>and\nnewlines</p>'
        assert extract_plain_text(html) == 'Multiple spaces and newlines'

    @pytest.mark.parametrize("markup", ['', None])
    def test_empty_input_returns_empty_string(self, markup):
        assert extract_plain_text(markup) == ''

    def test_macro_markup_is_stripped(self):
        """Macro tags disappear; their text bodies remain."""
        text = extract_plain_text(SAMPLE_PAGE_WITH_MACROS)

        assert 'ac:' not in text
        assert '<' not in text
        assert 'Informational panel.' in text
        assert 'Regular content after macro.' in text


class TestTruncate:
    """Test cases for truncate."""

    def test_short_text_unchanged(self):
        assert truncate('This is a short text', 100) == 'This is a short text'

    def test_text_exactly_at_limit_unchanged(self):
        assert truncate('abcde', 5) == 'abcde'

    def test_cuts_at_word_boundary_with_ellipsis(self):
        """Long text is cut at the last space and marked with an ellipsis."""
        result = truncate('This is a longer text that should be truncated', 15)

        assert result == 'This is a...'
        assert len(result) <= 15

    def test_hard_cut_without_word_boundary(self):
        """Without whitespace the text is cut at max_length and not marked."""
        assert truncate('ThisIsAVeryLongWordWithoutSpaces', 10) == 'ThisIsAVer'

    def test_blank_prefix_is_hard_cut(self):
        """A boundary with only whitespace before it does not produce a bare ellipsis."""
        assert truncate('   xxxxxxxxxx', 6) == '   xxx'

    def test_default_max_length(self):
        result = truncate('a' * 10000)
        assert len(result) == DEFAULT_MAX_LENGTH

    def test_result_never_exceeds_max_length(self):
        text = ' '.join(['word'] * 500)
        for max_length in (5, 12, 50, 333):
            assert len(truncate(text, max_length)) <= max_length

    def test_is_idempotent(self):
        """Truncating an already truncated text changes nothing."""
        text = 'Lorem ipsum dolor sit amet, consectetur adipiscing elit ' * 20
        once = truncate(text, 100)
        assert truncate(once, 100) == once

    @pytest.mark.parametrize("text", ['', None])
    def test_empty_input_returns_empty_string(self, text):
        assert truncate(text, 10) == ''


class TestOptimizeForAI:
    """Test cases for optimize_for_ai."""

    def test_matches_default_truncation(self):
        text = 'word ' * 3000
        assert optimize_for_ai(text) == truncate(text)

    def test_short_content_unchanged(self):
        assert optimize_for_ai('This is some content') == 'This is some content'

    def test_empty_content(self):
        assert optimize_for_ai('') == ''


class TestToMarkdown:
    """Test cases for to_markdown."""

    def test_heading_followed_by_paragraph(self):
        html = '<h1>Title</h1><p>Hello <strong>world</strong></p>'
        assert to_markdown(html) == '# Title\nHello **world**'

    def test_heading_levels(self):
        html = '<h1>Heading 1</h1><h2>Heading 2</h2><h3>Heading 3</h3>'
        assert to_markdown(html) == '# Heading 1\n## Heading 2\n### Heading 3'

    def test_paragraphs_separated_by_blank_line(self):
        html = '<p>First paragraph</p><p>Second paragraph</p>'
        assert to_markdown(html) == 'First paragraph\n\nSecond paragraph'

    def test_text_formatting(self):
        html = '<p>This is <strong>bold</strong> and <em>italic</em> text.</p>'
        assert to_markdown(html) == 'This is **bold** and *italic* text.'

    def test_presentational_bold_and_italic(self):
        html = '<p><b>bold</b> <i>italic</i></p>'
        assert to_markdown(html) == '**bold** *italic*'

    def test_link(self):
        html = '<a href="https://example.com">Example</a>'
        assert to_markdown(html) == '[Example](https://example.com)'

    def test_unordered_list(self):
        html = '<ul><li>Item 1</li><li>Item 2</li></ul>'
        assert to_markdown(html) == '- Item 1\n- Item 2'

    def test_ordered_list_uses_dash_items(self):
        html = '<ol><li>First</li><li>Second</li></ol>'
        assert to_markdown(html) == '- First\n- Second'

    def test_inline_elements_combined(self):
        result = to_markdown(SAMPLE_PAGE_INLINE)

        assert '[guide](https://example.com/guide)' in result
        assert '**bold**' in result
        assert '*italic*' in result

    def test_bold_nested_in_link_is_kept(self):
        """Nested tags convert regardless of nesting order."""
        html = '<p><a href="https://example.com"><strong>Bold link</strong></a></p>'
        assert to_markdown(html) == '[**Bold link**](https://example.com)'

    def test_multiline_document(self):
        result = to_markdown(SAMPLE_PAGE_SIMPLE)

        assert result.startswith('# Test Page\n')
        assert '## Section 1' in result
        assert '- Item 1\n- Item 2' in result
        assert '\n\n\n' not in result
        assert result == result.strip()

    def test_unknown_tags_are_stripped(self):
        result = to_markdown(SAMPLE_PAGE_WITH_MACROS)

        assert '<' not in result
        assert 'Informational panel.' in result
        assert 'Regular content after macro.' in result

    @pytest.mark.parametrize("markup", ['', None])
    def test_empty_input_returns_empty_string(self, markup):
        assert to_markdown(markup) == ''
