"""
Test suite for citation tag replacement and source markup removal.

System role: Verification of plain-text rendering helpers
"""

from citeparse.core.citation_key import generate_citation_key
from citeparse.core.replacement import (
    remove_line_id_metadata,
    remove_page_number_metadata,
    replace_citations,
)
from citeparse.models.citation import Citation
from citeparse.models.verification import Verification

TEXT = "Revenue grew <cite full_phrase='Revenue grew 45%' anchor_text='45%' /> this year."


class TestReplaceCitations:
    """Test suite for replace_citations."""

    def test_should_remove_tags_by_default(self) -> None:
        assert replace_citations(TEXT) == "Revenue grew  this year."

    def test_should_leave_anchor_text_behind(self) -> None:
        assert replace_citations(TEXT, leave_anchor_text_behind=True) == "Revenue grew 45% this year."

    def test_should_find_verification_by_key(self) -> None:
        """Test the citation key is tried first."""
        # Arrange
        key = generate_citation_key(Citation(full_phrase="Revenue grew 45%"))
        verifications = {key: Verification(status="found"), "1": Verification(status="not_found")}

        # Act
        result = replace_citations(
            TEXT,
            leave_anchor_text_behind=True,
            verifications=verifications,
            show_verification_status=True,
        )

        # Assert
        assert result == "Revenue grew 45%☑️ this year."

    def test_should_fall_back_to_ordinal(self) -> None:
        result = replace_citations(
            TEXT,
            leave_anchor_text_behind=True,
            verifications={"1": {"status": "not_found"}},
            show_verification_status=True,
        )

        assert result == "Revenue grew 45%❌ this year."

    def test_missing_verification_is_pending(self) -> None:
        result = replace_citations(TEXT, verifications={}, show_verification_status=True)

        assert result == "Revenue grew ⌛ this year."

    def test_status_requires_verifications(self) -> None:
        assert replace_citations(TEXT, show_verification_status=True) == "Revenue grew  this year."

    def test_enclosed_content_is_kept(self) -> None:
        assert replace_citations("A <cite full_phrase='x'>body</cite> B") == "A body B"

    def test_text_without_tags_is_unchanged(self) -> None:
        assert replace_citations("no tags") == "no tags"


class TestMetadataRemoval:
    """Test suite for page and line markup removal."""

    def test_remove_page_number_metadata(self) -> None:
        text = "<page_number_1_index_0>\nHello\n</page_number_1_index_0>\n"

        assert remove_page_number_metadata(text) == "Hello"

    def test_remove_line_id_metadata(self) -> None:
        text = '<line id="1">first</line>\n<line id="2">second</line>'

        assert remove_line_id_metadata(text) == "first\nsecond"
