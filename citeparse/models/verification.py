"""
Verification domain model.

Verifications are produced by an external search subsystem that tries to
locate a citation's text in its source. citeparse only consumes them to
derive display status flags.

Dependencies: pydantic
System role: Verification data structures
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from citeparse.models.citation import Citation


class SearchStatus(str, Enum):
    """Known verification search outcomes."""

    LOADING = "loading"
    PENDING = "pending"
    NOT_FOUND = "not_found"
    FOUND = "found"
    PARTIAL_TEXT_FOUND = "partial_text_found"
    FOUND_ON_OTHER_PAGE = "found_on_other_page"
    FOUND_ON_OTHER_LINE = "found_on_other_line"
    FIRST_WORD_FOUND = "first_word_found"
    FOUND_ANCHOR_TEXT_ONLY = "found_anchor_text_only"
    FOUND_KEY_SPAN_ONLY = "found_key_span_only"
    FOUND_VALUE_ONLY = "found_value_only"
    FOUND_PHRASE_MISSED_VALUE = "found_phrase_missed_value"
    FOUND_PHRASE_MISSED_ANCHOR_TEXT = "found_phrase_missed_anchor_text"


class Verification(BaseModel):
    """Verification record for one citation (external, consumed only)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    attachment_id: str | None = Field(default=None, alias="attachmentId")
    status: str | None = Field(default=None, description="SearchStatus value; unknown values are allowed")
    citation: Citation | None = None
    verified_full_phrase: str | None = Field(default=None, alias="verifiedFullPhrase")
    verified_anchor_text: str | None = Field(default=None, alias="verifiedAnchorText")
    verified_match_snippet: str | None = Field(default=None, alias="verifiedMatchSnippet")


class CitationStatus(BaseModel):
    """Display flags derived from a verification."""

    model_config = ConfigDict(frozen=True)

    is_verified: bool = False
    is_miss: bool = False
    is_partial_match: bool = False
    is_pending: bool = False
