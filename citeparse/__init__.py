"""
citeparse: citation extraction and normalization for LLM output.

Parses inline <cite .../> tags, citation-shaped JSON objects and deferred
citation blocks into a deduplicated mapping of citation key -> Citation.

Usage:
    from citeparse import get_all_citations_from_llm_output

    citations = get_all_citations_from_llm_output(llm_response)
"""

from citeparse.configs import Settings, get_settings
from citeparse.core.citation_key import generate_citation_key
from citeparse.core.exceptions import CiteParseException, CoercionError, DeferredBlockError
from citeparse.core.grouping import group_citations_by_attachment_id
from citeparse.core.parsing import (
    CitationAggregator,
    CitationCounter,
    extract_visible_text,
    get_all_citations_from_deferred_response,
    get_all_citations_from_llm_output,
    get_citation_marker_ids,
    has_deferred_citations,
    parse_citation,
    parse_deferred_citation_response,
    replace_deferred_markers,
)
from citeparse.core.replacement import (
    remove_line_id_metadata,
    remove_page_number_metadata,
    replace_citations,
)
from citeparse.core.status import get_citation_status, get_verification_text_indicator
from citeparse.core.workarounds import clean_repeating_last_sentence, is_repetitive_garbage
from citeparse.models import (
    Citation,
    CitationData,
    CitationParseResult,
    CitationStatus,
    ParsedCitationResponse,
    SearchStatus,
    Timestamps,
    Verification,
)

__version__ = "0.1.0"

__all__ = [
    "Citation",
    "CitationAggregator",
    "CitationCounter",
    "CitationData",
    "CitationParseResult",
    "CitationStatus",
    "CiteParseException",
    "CoercionError",
    "DeferredBlockError",
    "ParsedCitationResponse",
    "SearchStatus",
    "Settings",
    "Timestamps",
    "Verification",
    "clean_repeating_last_sentence",
    "extract_visible_text",
    "generate_citation_key",
    "get_all_citations_from_deferred_response",
    "get_all_citations_from_llm_output",
    "get_citation_marker_ids",
    "get_citation_status",
    "get_settings",
    "get_verification_text_indicator",
    "group_citations_by_attachment_id",
    "has_deferred_citations",
    "is_repetitive_garbage",
    "parse_citation",
    "parse_deferred_citation_response",
    "remove_line_id_metadata",
    "remove_page_number_metadata",
    "replace_citations",
    "replace_deferred_markers",
]
