"""
Citation extraction pipeline.

Leaf to root: attribute extraction, field normalization, value coercion
and tag location feed the XML, JSON and deferred-block extractors, whose
results the aggregator merges into one keyed, numbered mapping.
"""

from citeparse.core.parsing.aggregator import CitationAggregator, get_all_citations_from_llm_output
from citeparse.core.parsing.attributes import extract_attributes
from citeparse.core.parsing.deferred_extractor import (
    deferred_citation_to_citation,
    extract_visible_text,
    get_all_citations_from_deferred_response,
    get_citation_marker_ids,
    has_deferred_citations,
    parse_deferred_citation_response,
    replace_deferred_markers,
)
from citeparse.core.parsing.field_aliases import normalize_fields
from citeparse.core.parsing.json_extractor import (
    extract_json_citations,
    is_citation_shaped,
    parse_json_citation,
    walk_json,
)
from citeparse.core.parsing.json_repair import repair_json
from citeparse.core.parsing.tag_locator import TagSpan, iter_tag_spans
from citeparse.core.parsing.xml_extractor import CitationCounter, extract_xml_citations, parse_citation

__all__ = [
    "CitationAggregator",
    "CitationCounter",
    "TagSpan",
    "deferred_citation_to_citation",
    "extract_attributes",
    "extract_json_citations",
    "extract_visible_text",
    "extract_xml_citations",
    "get_all_citations_from_deferred_response",
    "get_all_citations_from_llm_output",
    "get_citation_marker_ids",
    "has_deferred_citations",
    "is_citation_shaped",
    "iter_tag_spans",
    "normalize_fields",
    "parse_citation",
    "parse_deferred_citation_response",
    "parse_json_citation",
    "repair_json",
    "replace_deferred_markers",
    "walk_json",
]
