"""Tests for citation, deferred and verification models."""

import pytest
from pydantic import ValidationError

from citeparse.models.citation import Citation, CitationParseResult, Timestamps
from citeparse.models.deferred import CitationData, ParsedCitationResponse
from citeparse.models.verification import SearchStatus, Verification


class TestCitation:
    """Tests for the Citation model."""

    def test_all_fields_default_to_none(self) -> None:
        citation = Citation()

        assert citation.model_dump() == {
            "citation_number": None,
            "attachment_id": None,
            "full_phrase": None,
            "anchor_text": None,
            "page_number": None,
            "start_page_key": None,
            "line_ids": None,
            "reasoning": None,
            "timestamps": None,
        }

    def test_line_ids_are_sorted_and_unique(self) -> None:
        assert Citation(line_ids=(3, 1, 3)).line_ids == (1, 3)
        assert Citation(line_ids=()).line_ids is None

    def test_is_frozen(self) -> None:
        citation = Citation(full_phrase="x")

        with pytest.raises(ValidationError):
            citation.full_phrase = "y"

    @pytest.mark.parametrize("field", ["citation_number", "page_number"])
    def test_rejects_out_of_range_numbers(self, field: str) -> None:
        with pytest.raises(ValidationError):
            Citation(**{field: -1})

    def test_accepts_camel_case_aliases(self) -> None:
        citation = Citation.model_validate(
            {"fullPhrase": "p", "attachmentId": "a", "timestamps": {"startTime": "1", "endTime": "2"}}
        )

        assert citation.full_phrase == "p"
        assert citation.attachment_id == "a"
        assert citation.timestamps == Timestamps(start_time="1", end_time="2")

    def test_dumps_camel_case(self) -> None:
        citation = Citation(full_phrase="p", line_ids=(2,))

        assert citation.model_dump(by_alias=True, exclude_none=True) == {"fullPhrase": "p", "lineIds": (2,)}

    def test_kind_properties(self) -> None:
        document = Citation(full_phrase="p", page_number=1)
        clip = Citation(timestamps=Timestamps(start_time="1"))

        assert document.is_document_citation and not document.is_av_citation
        assert clip.is_av_citation and not clip.is_document_citation
        assert document.has_identity and clip.has_identity
        assert not Citation(page_number=1).has_identity

    def test_parse_result_defaults(self) -> None:
        result = CitationParseResult()

        assert result.before_text == ""
        assert result.after_text == ""
        assert result.citation == Citation()


class TestCitationData:
    """Tests for the deferred record model."""

    def test_accepts_alias_spellings(self) -> None:
        data = CitationData.model_validate(
            {"attachmentId": "a", "fullPhrase": "p", "keySpan": "k", "startPageKey": 3, "lineIds": "2,1"}
        )

        assert data.attachment_id == "a"
        assert data.full_phrase == "p"
        assert data.anchor_text == "k"
        assert data.page_id == "3"
        assert data.line_ids == [1, 2]

    def test_ignores_unknown_fields(self) -> None:
        assert CitationData.model_validate({"full_phrase": "p", "extra": 1}).full_phrase == "p"

    def test_response_defaults(self) -> None:
        response = ParsedCitationResponse()

        assert response.success
        assert response.citations == []
        assert response.citation_map == {}


class TestVerification:
    """Tests for the verification model."""

    def test_known_statuses(self) -> None:
        assert SearchStatus("found_on_other_line") is SearchStatus.FOUND_ON_OTHER_LINE

    def test_allows_unknown_status_and_aliases(self) -> None:
        verification = Verification.model_validate(
            {"status": "brand_new_status", "verifiedFullPhrase": "p", "unused": True}
        )

        assert verification.status == "brand_new_status"
        assert verification.verified_full_phrase == "p"
