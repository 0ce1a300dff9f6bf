"""
Citation aggregator and top-level extraction entry point.

Merges what the XML, JSON and deferred-block extractors discover in one
input value, drops citations with nothing to verify, collapses duplicates
by content key and numbers the survivors 1, 2, 3... in discovery order.

Dependencies: citeparse.core.parsing extractors
System role: Public extraction API
"""

from collections.abc import Iterable, Mapping
from typing import Any

from citeparse.core.citation_key import generate_citation_key
from citeparse.core.parsing.deferred_extractor import extract_deferred_citations, has_deferred_citations
from citeparse.core.parsing.json_extractor import parse_json_citation, walk_json
from citeparse.core.parsing.xml_extractor import CitationCounter, extract_xml_citations
from citeparse.models.citation import Citation
from citeparse.observability import get_logger

logger = get_logger(__name__)


class CitationAggregator:
    """
    Per-call deduplicating collector.

    Holds the counter and the key -> citation mapping for one top-level
    extraction; create a new instance for every call.
    """

    def __init__(self) -> None:
        """Initialize an empty aggregator."""
        self._counter = CitationCounter()
        self._citations: dict[str, Citation] = {}

    def add(self, citation: Citation) -> str | None:
        """
        Offer a citation in discovery order.

        Args:
            citation: Citation from any extractor

        Returns:
            str | None: The citation's key, or None when it was dropped
            for carrying neither a phrase nor timestamps
        """
        if not citation.has_identity:
            return None

        key = generate_citation_key(citation)
        if key not in self._citations:
            self._citations[key] = citation.model_copy(update={"citation_number": self._counter.next()})
        return key

    def add_all(self, citations: Iterable[Citation]) -> None:
        """Offer several citations in order."""
        for citation in citations:
            self.add(citation)

    def result(self) -> dict[str, Citation]:
        """Return a copy of the key -> citation mapping, in number order."""
        return dict(self._citations)


def _scan_text(aggregator: CitationAggregator, text: str) -> None:
    """Add inline tag citations, then deferred block citations, found in text."""
    aggregator.add_all(extract_xml_citations(text))
    if has_deferred_citations(text):
        aggregator.add_all(extract_deferred_citations(text))


def get_all_citations_from_llm_output(llm_output: Any) -> dict[str, Citation]:
    """
    Extract every citation from raw LLM or agent output.

    Strings are scanned for inline tags and a deferred block. Dicts and
    lists are walked for citation-shaped objects, and each string value
    met on the way is scanned like a string input. None, numbers and
    booleans yield an empty mapping. Malformed input never raises.

    Args:
        llm_output: Raw output of unknown shape

    Returns:
        dict[str, Citation]: Citation key -> citation, numbered 1..N in
        discovery order

    Usage:
        citations = get_all_citations_from_llm_output(response_text)
        for key, citation in citations.items():
            print(key, citation.citation_number, citation.full_phrase)
    """
    if not isinstance(llm_output, (str, Mapping, list, tuple)):
        return {}

    aggregator = CitationAggregator()

    def _on_citation(obj: Mapping[str, Any]) -> None:
        citation = parse_json_citation(obj)
        if citation is not None:
            aggregator.add(citation)

    walk_json(llm_output, _on_citation, on_string=lambda text: _scan_text(aggregator, text))

    citations = aggregator.result()
    if citations:
        logger.debug("get_all_citations_from_llm_output - Extracted %d citation(s)", len(citations))
    return citations
