"""
JSON-citation extractor.

Walks arbitrary JSON-like values (dicts, lists, strings, scalars) looking
for citation-shaped objects. Only the root value and values found under
"citation"/"citations" properties are tested for shape; other properties
are walked only to reach further "citation"/"citations" properties and
string values. Strings are handed to a callback so the caller can scan
them for inline tags.

Dependencies: citeparse.configs
System role: Citation discovery in structured tool/agent output
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from citeparse.configs import get_settings
from citeparse.core.exceptions import CoercionError
from citeparse.core.parsing.coercers import (
    decode_optional_phrase,
    normalize_page_key,
    parse_line_ids,
    parse_page_number,
    parse_timestamps,
)
from citeparse.core.parsing.field_aliases import PHRASE_FIELDS, normalize_fields
from citeparse.models.citation import Citation
from citeparse.observability import get_logger, log_with_context

logger = get_logger(__name__)

CITATION_CONTAINER_KEYS = ("citation", "citations")


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _coerce(coercer: Callable[[Any], Any], value: Any, field: str) -> Any:
    """Apply a coercer, treating an unsupported value type as absent."""
    try:
        return coercer(value)
    except CoercionError:
        log_with_context(
            logger,
            logging.DEBUG,
            "_coerce - Ignoring uncoercible JSON value",
            field=field,
            value=value,
        )
        return None


def _phrase(obj: Mapping[str, Any]) -> str | None:
    for alias in PHRASE_FIELDS:
        phrase = _text(obj.get(alias))
        if phrase:
            return phrase
    return None


def is_citation_shaped(obj: Any) -> bool:
    """
    Return True when obj is a mapping carrying a non-empty phrase.

    A phrase under any recognized alias is sufficient; page, line and
    anchor fields only ever accompany it.
    """
    return isinstance(obj, Mapping) and _phrase(obj) is not None


def _page_source(fields: Mapping[str, Any]) -> Any:
    page_key = fields.get("start_page_key")
    if page_key is not None:
        return page_key
    page_number = fields.get("page_number")
    if isinstance(page_number, str) and page_number.strip().isdigit():
        return int(page_number.strip())
    return page_number


def parse_json_citation(obj: Any) -> Citation | None:
    """
    Build a Citation from a citation-shaped JSON object.

    Phrase, anchor text and reasoning are decoded the same way as tag
    attributes, so one citation keys identically on every path. A
    citation number already present in the object is not trusted; the
    aggregator numbers citations.

    Returns:
        Citation | None: Parsed citation, or None when obj is not citation-shaped
    """
    if not is_citation_shaped(obj):
        return None

    fields = normalize_fields(obj)
    anchor_text = _text(fields.get("anchor_text")) or _text(fields.get("value"))
    page_source = _page_source(fields)

    return Citation(
        attachment_id=_text(fields.get("attachment_id")),
        full_phrase=decode_optional_phrase(_phrase(obj)),
        anchor_text=decode_optional_phrase(anchor_text),
        page_number=_coerce(parse_page_number, page_source, "page_number"),
        start_page_key=_coerce(normalize_page_key, page_source, "start_page_key"),
        line_ids=_coerce(parse_line_ids, fields.get("line_ids"), "line_ids"),
        reasoning=decode_optional_phrase(_text(fields.get("reasoning"))),
        timestamps=_coerce(parse_timestamps, fields.get("timestamps"), "timestamps"),
    )


def walk_json(
    value: Any,
    on_citation: Callable[[Mapping[str, Any]], None],
    on_string: Callable[[str], None] | None = None,
    max_depth: int | None = None,
) -> None:
    """
    Walk a JSON-like value depth-first, in key and index order.

    A citation-shaped object is not searched for further citations, but
    its string values still reach on_string. Descent stops silently past
    max_depth and on any container already being visited higher up the
    current path.

    Args:
        value: Root value (the root itself is tested for citation shape)
        on_citation: Called with each citation-shaped object
        on_string: Called with every string value, including a string root
        max_depth: Nesting bound; defaults to ParsingSettings.max_json_depth
    """
    limit = max_depth if max_depth is not None else get_settings().parsing.max_json_depth
    active: set[int] = set()

    def _walk(node: Any, candidate: bool, depth: int, strings_only: bool = False) -> None:
        if isinstance(node, str):
            if on_string is not None:
                on_string(node)
            return
        if not isinstance(node, (Mapping, list, tuple)):
            return
        if depth > limit:
            logger.debug("walk_json - Depth limit %d reached; not descending", limit)
            return
        if id(node) in active:
            logger.debug("walk_json - Cycle detected; not descending")
            return

        active.add(id(node))
        try:
            if isinstance(node, Mapping):
                if not strings_only and candidate and is_citation_shaped(node):
                    on_citation(node)
                    # A citation object is a leaf; its strings are still scanned.
                    strings_only = True
                    if on_string is None:
                        return
                for key, child in node.items():
                    _walk(child, key in CITATION_CONTAINER_KEYS, depth + 1, strings_only)
            else:
                for item in node:
                    _walk(item, candidate, depth + 1, strings_only)
        finally:
            active.discard(id(node))

    _walk(value, True, 0)


def extract_json_citations(value: Any) -> list[Citation]:
    """
    Return the citations found in citation-shaped objects of a JSON value.

    String values are not scanned here; the aggregator adds inline tag
    citations found in them.
    """
    citations: list[Citation] = []

    def _collect(obj: Mapping[str, Any]) -> None:
        citation = parse_json_citation(obj)
        if citation is not None:
            citations.append(citation)

    walk_json(value, _collect)
    return citations
