"""
Test suite for the attribute extractor.

Tests quoting styles, unescaped inner quotes, escaped quotes, attribute
order and the missing-bracket prefix.

System role: Verification of raw tag attribute parsing
"""

from citeparse.core.parsing.attributes import TagEnd, extract_attributes, scan_attributes
from citeparse.core.parsing.coercers import decode_phrase


class TestExtractAttributes:
    """Test suite for extract_attributes."""

    def test_should_read_single_and_double_quoted_values(self) -> None:
        """Test both quote styles within one tag."""
        # Act
        attributes = extract_attributes("<cite attachment_id='abc' full_phrase=\"hi there\" />")

        # Assert
        assert attributes == {"attachment_id": "abc", "full_phrase": "hi there"}

    def test_should_tolerate_unescaped_quote_inside_value(self) -> None:
        """Test a quote inside the value does not end it early."""
        # Act
        attributes = extract_attributes(
            "<cite full_phrase='the patient's chart' key_span='chart' />"
        )

        # Assert
        assert attributes["full_phrase"] == "the patient's chart"
        assert attributes["key_span"] == "chart"

    def test_should_keep_escaped_quotes_in_raw_value(self) -> None:
        """Test escaped quotes are not terminators and decode to literal quotes."""
        # Act
        attributes = extract_attributes(r"<cite full_phrase='it\'s fine' />")

        # Assert
        assert attributes["full_phrase"] == r"it\'s fine"
        assert decode_phrase(attributes["full_phrase"]) == "it's fine"

    def test_attribute_order_should_not_matter(self) -> None:
        """Test permuted attributes produce the same mapping."""
        first = extract_attributes("<cite a='1' full_phrase='x' line_ids='3' />")
        second = extract_attributes("<cite line_ids='3' a='1' full_phrase='x' />")

        assert first == second

    def test_should_retain_unknown_attributes(self) -> None:
        """Test unknown attribute names are kept for later stages."""
        attributes = extract_attributes("<cite foo='bar' full_phrase='x' />")

        assert attributes == {"foo": "bar", "full_phrase": "x"}

    def test_should_accept_tag_without_leading_bracket(self) -> None:
        """Test a bare 'cite' prefix is skipped."""
        attributes = extract_attributes("cite attachment_id='x' full_phrase='y' />")

        assert attributes == {"attachment_id": "x", "full_phrase": "y"}

    def test_should_unescape_markdown_underscores_in_names(self) -> None:
        """Test attachment\\_id is recorded as attachment_id."""
        attributes = extract_attributes(r"<cite attachment\_id='abc' />")

        assert attributes == {"attachment_id": "abc"}

    def test_should_read_unquoted_values(self) -> None:
        """Test unquoted values end at whitespace or the tag end."""
        attributes = extract_attributes("<cite line_ids=1,2 full_phrase='x'/>")

        assert attributes == {"line_ids": "1,2", "full_phrase": "x"}


class TestScanAttributes:
    """Test suite for scan_attributes tag termination."""

    def test_open_tag_should_end_after_bracket(self) -> None:
        """Test a '>' terminated head reports OPEN and stops after '>'."""
        text = "<cite full_phrase='x'>body</cite>"

        attributes, end, tag_end = scan_attributes(text, len("<cite"))

        assert attributes == {"full_phrase": "x"}
        assert tag_end is TagEnd.OPEN
        assert text[end:] == "body</cite>"

    def test_self_closing_tag(self) -> None:
        """Test '/>' reports SELF_CLOSING."""
        text = "<cite full_phrase='x' /> after"

        _, end, tag_end = scan_attributes(text, len("<cite"))

        assert tag_end is TagEnd.SELF_CLOSING
        assert text[end:] == " after"

    def test_truncated_value_should_run_to_end(self) -> None:
        """Test a value without a closing quote is read to the end of input."""
        text = "cite full_phrase='abc"

        attributes, end, tag_end = scan_attributes(text, len("cite"))

        assert attributes == {"full_phrase": "abc"}
        assert end == len(text)
        assert tag_end is TagEnd.UNTERMINATED
