"""
Citation grouping by attachment.

Verification requests are issued per attachment, so callers split the
extracted mapping by attachment id before sending it.

Dependencies: citeparse.models
System role: Citation batching helper
"""

from collections.abc import Iterable, Mapping

from citeparse.core.citation_key import generate_citation_key
from citeparse.models.citation import Citation


def group_citations_by_attachment_id(
    citations: Mapping[str, Citation] | Iterable[Citation],
) -> dict[str, dict[str, Citation]]:
    """
    Group citations by attachment id.

    Args:
        citations: Key -> citation mapping (keys are kept) or a sequence of
            citations (keyed by their citation key)

    Returns:
        dict[str, dict[str, Citation]]: Attachment id ("" when absent) ->
        key -> citation, in input order
    """
    if isinstance(citations, Mapping):
        entries = citations.items()
    else:
        entries = ((generate_citation_key(citation), citation) for citation in citations)

    grouped: dict[str, dict[str, Citation]] = {}
    for key, citation in entries:
        grouped.setdefault(citation.attachment_id or "", {})[key] = citation
    return grouped
