"""
Citation tag replacement.

Produces plain text from tagged LLM output: every citation tag is
removed, optionally leaving its anchor text and a verification status
indicator behind. Also strips the page and line markup that source text
carries when it is shown to a model.

Dependencies: citeparse.core.parsing
System role: Plain-text rendering of tagged output
"""

import re
from collections.abc import Mapping
from typing import Any

from citeparse.core.citation_key import generate_citation_key
from citeparse.core.parsing.tag_locator import iter_tag_spans
from citeparse.core.parsing.xml_extractor import citation_from_attributes
from citeparse.core.status import get_verification_text_indicator
from citeparse.models.verification import Verification

_PAGE_NUMBER_TAG = re.compile(r"</?page_number_\d+_index_\d+>")
_LINE_ID_TAG = re.compile(r"<line id=\"[^\"]*\">|</line>")


def replace_citations(
    text: str,
    leave_anchor_text_behind: bool = False,
    verifications: Mapping[str, Verification | Mapping[str, Any]] | None = None,
    show_verification_status: bool = False,
) -> str:
    """
    Replace every citation tag in text.

    Content enclosed between a tag and its </cite> is kept in place of
    the closing tag; only the tag markup is replaced.

    Args:
        text: Text containing citation tags
        leave_anchor_text_behind: Replace each tag with its decoded anchor text
        verifications: Verifications keyed by citation key or by the tag's
            1-based position ("1", "2", ...)
        show_verification_status: Append a status indicator to each replacement

    Returns:
        str: Text with tags replaced
    """
    pieces: list[str] = []
    cursor = 0
    for ordinal, span in enumerate(iter_tag_spans(text), start=1):
        citation = citation_from_attributes(span.attributes)

        output = ""
        if leave_anchor_text_behind and citation.anchor_text:
            output = citation.anchor_text

        if show_verification_status and verifications is not None:
            verification = verifications.get(generate_citation_key(citation))
            if verification is None:
                verification = verifications.get(str(ordinal))
            output += get_verification_text_indicator(verification)

        pieces.append(text[cursor:span.start])
        pieces.append(span.body)
        pieces.append(output)
        cursor = span.end

    pieces.append(text[cursor:])
    return "".join(pieces)


def remove_page_number_metadata(page_text: str) -> str:
    """Remove <page_number_N_index_M> open and close tags and trim the result."""
    return _PAGE_NUMBER_TAG.sub("", page_text).strip()


def remove_line_id_metadata(page_text: str) -> str:
    """Remove <line id="..."> and </line> tags."""
    return _LINE_ID_TAG.sub("", page_text)
