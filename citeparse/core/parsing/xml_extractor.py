"""
XML-citation extractor.

Combines the tag locator, attribute extractor, field normalizer and
value coercers to turn text containing <cite .../> tags into Citation
records.

Dependencies: citeparse.models
System role: Inline tag citation parsing
"""

from collections.abc import Mapping

from citeparse.core.parsing.coercers import (
    decode_optional_phrase,
    normalize_page_key,
    parse_line_ids,
    parse_page_number,
    parse_timestamps,
    resolve_attachment_id,
    unescape_underscores,
)
from citeparse.core.parsing.field_aliases import normalize_fields
from citeparse.core.parsing.tag_locator import iter_tag_spans
from citeparse.models.citation import Citation, CitationParseResult
from citeparse.observability import get_logger

logger = get_logger(__name__)


class CitationCounter:
    """
    Mutable citation-number cell scoped to one caller.

    Attributes:
        current: Number handed out by the next call to next()
    """

    def __init__(self, start: int = 1) -> None:
        """Initialize counter at start."""
        self.current = start

    def next(self) -> int:
        """Return the current number and advance by one."""
        number = self.current
        self.current += 1
        return number


def citation_from_attributes(
    attributes: Mapping[str, str],
    fallback_attachment_id: str | None = None,
    citation_number: int | None = None,
) -> Citation:
    """
    Build a Citation from one tag's raw attributes.

    Missing attributes leave the corresponding fields as None. The anchor
    text comes from anchor_text/key_span, else from value; reasoning is
    kept independently.

    Args:
        attributes: Raw attribute map from the attribute extractor
        fallback_attachment_id: Caller-supplied attachment id (see resolve_attachment_id)
        citation_number: Number to assign, if any

    Returns:
        Citation: Parsed citation
    """
    fields = normalize_fields(attributes)

    tag_id = fields.get("attachment_id")
    tag_id = unescape_underscores(tag_id).strip() if tag_id else None

    anchor_source = fields.get("anchor_text")
    if anchor_source is None:
        anchor_source = fields.get("value")

    page_key = fields.get("start_page_key")

    return Citation(
        citation_number=citation_number,
        attachment_id=resolve_attachment_id(tag_id or None, fallback_attachment_id),
        full_phrase=decode_optional_phrase(fields.get("full_phrase")),
        anchor_text=decode_optional_phrase(anchor_source),
        page_number=parse_page_number(page_key),
        start_page_key=normalize_page_key(page_key),
        line_ids=parse_line_ids(fields.get("line_ids")),
        reasoning=decode_optional_phrase(fields.get("reasoning")),
        timestamps=parse_timestamps(fields.get("timestamps")),
    )


def parse_citation(
    fragment: str,
    fallback_attachment_id: str | None = None,
    counter: CitationCounter | None = None,
) -> CitationParseResult:
    """
    Parse the first citation tag in a fragment (interactive render path).

    Args:
        fragment: Text that may contain a citation tag
        fallback_attachment_id: Attachment id to prefer over non-platform tag ids
        counter: Citation-number cell; advanced by one when a tag is parsed

    Returns:
        CitationParseResult: Surrounding text and the citation. With no tag,
        both texts are empty and every citation field is None.
    """
    span = next(iter_tag_spans(fragment), None)
    if span is None:
        return CitationParseResult()

    citation = citation_from_attributes(
        span.attributes,
        fallback_attachment_id=fallback_attachment_id,
        citation_number=counter.next() if counter is not None else None,
    )
    return CitationParseResult(
        before_text=fragment[:span.start],
        after_text=fragment[span.end:],
        citation=citation,
    )


def extract_xml_citations(
    text: str,
    fallback_attachment_id: str | None = None,
) -> list[Citation]:
    """
    Parse every citation tag in text (bulk extraction path).

    Citations are returned unnumbered and unfiltered; the aggregator
    numbers, filters and deduplicates them.
    """
    citations = [
        citation_from_attributes(span.attributes, fallback_attachment_id=fallback_attachment_id)
        for span in iter_tag_spans(text)
    ]
    if citations:
        logger.debug("extract_xml_citations - Found %d tag(s)", len(citations))
    return citations
