"""
Deferred citation block extractor.

Some prompts ask the model to answer in prose with [N] markers and append
the citation records afterwards as JSON, between sentinel lines:

    Revenue grew 45% [1].

    <<<CITATION_DATA>>>
    {"abc123": [{"n": 1, "f": "revenue grew 45%", "k": "45%", "p": "2_0", "l": [12]}]}
    <<<END_CITATION_DATA>>>

The payload is either grouped (object of attachment id -> record list) or
a flat list of records carrying their own attachment id. Records may use
the compact single-letter keys. The end sentinel is optional; a missing
one means the block runs to the end of the text.

Dependencies: pydantic, citeparse.configs
System role: Out-of-band citation block parsing
"""

import json
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from citeparse.configs import get_settings
from citeparse.core.citation_key import generate_citation_key
from citeparse.core.exceptions import DeferredBlockError
from citeparse.core.parsing.coercers import decode_optional_phrase, normalize_page_key, parse_page_number
from citeparse.core.parsing.json_repair import repair_json
from citeparse.models.citation import Citation, Timestamps
from citeparse.models.deferred import CitationData, ParsedCitationResponse
from citeparse.observability import get_logger, log_with_context

logger = get_logger(__name__)

COMPACT_KEY_MAP: dict[str, str] = {
    "n": "id",
    "a": "attachment_id",
    "r": "reasoning",
    "f": "full_phrase",
    "k": "anchor_text",
    "p": "page_id",
    "l": "line_ids",
    "t": "timestamps",
}

_MARKER = re.compile(r"\[(\d+)\]")


def _expand_compact_keys(record: Mapping[str, Any], attachment_id: str | None = None) -> dict[str, Any]:
    """Rename compact keys and inject the group's attachment id."""
    expanded: dict[str, Any] = {}
    for key, value in record.items():
        full_key = COMPACT_KEY_MAP.get(key, key)
        if full_key == "timestamps" and not isinstance(value, Mapping):
            continue
        expanded[full_key] = value

    if attachment_id:
        expanded.pop("attachmentId", None)
        expanded["attachment_id"] = attachment_id
    return expanded


def _is_grouped(payload: Any) -> bool:
    return (
        isinstance(payload, Mapping)
        and len(payload) > 0
        and all(isinstance(value, list) for value in payload.values())
    )


def _iter_records(payload: Any):
    """Yield (record, group attachment id) pairs from a decoded payload."""
    if _is_grouped(payload):
        for attachment_id, records in payload.items():
            for record in records:
                yield record, str(attachment_id)
    elif isinstance(payload, list):
        for record in payload:
            yield record, None
    else:
        yield payload, None


def _records_from_payload(payload: Any) -> list[CitationData]:
    citations: list[CitationData] = []
    for record, attachment_id in _iter_records(payload):
        if not isinstance(record, Mapping):
            continue
        try:
            citations.append(CitationData.model_validate(_expand_compact_keys(record, attachment_id)))
        except ValidationError as e:
            log_with_context(
                logger,
                logging.DEBUG,
                "_records_from_payload - Skipping invalid citation record",
                record=record,
                errors=e.error_count(),
            )
    return citations


def _decode_payload(payload: str) -> Any:
    """
    Decode the block payload, repairing it when the first attempt fails.

    Raises:
        DeferredBlockError: If the payload is not valid JSON even after repair
    """
    try:
        return json.loads(payload)
    except json.JSONDecodeError:
        pass

    repaired, repairs = repair_json(payload)
    try:
        decoded = json.loads(repaired)
    except json.JSONDecodeError as e:
        raise DeferredBlockError(
            f"Failed to parse citation JSON: {e.msg}",
            repairs=repairs,
            details={"position": e.pos},
        ) from e

    logger.warning("_decode_payload - Citation JSON needed repair: %s", ", ".join(repairs))
    return decoded


def parse_deferred_citation_response(llm_response: str) -> ParsedCitationResponse:
    """
    Split an LLM response into visible text and deferred citation records.

    Never raises for malformed payloads; success is False and error is
    set instead.

    Args:
        llm_response: Full model response

    Returns:
        ParsedCitationResponse: Visible text, records and id map
    """
    if not isinstance(llm_response, str) or not llm_response:
        return ParsedCitationResponse(success=False, error="Invalid input: expected a string")

    settings = get_settings().parsing
    start_index = llm_response.find(settings.deferred_start_delimiter)
    if start_index == -1:
        return ParsedCitationResponse(visible_text=llm_response.strip())

    visible_text = llm_response[:start_index].strip()
    payload_start = start_index + len(settings.deferred_start_delimiter)
    end_index = llm_response.find(settings.deferred_end_delimiter, payload_start)
    payload = llm_response[payload_start:end_index if end_index != -1 else len(llm_response)].strip()

    citations: list[CitationData] = []
    if payload:
        try:
            citations = _records_from_payload(_decode_payload(payload))
        except DeferredBlockError as e:
            logger.warning("parse_deferred_citation_response - %s", e)
            return ParsedCitationResponse(visible_text=visible_text, success=False, error=e.message)

    citation_map = {data.id: data for data in citations if data.id is not None}
    return ParsedCitationResponse(
        visible_text=visible_text,
        citations=citations,
        citation_map=citation_map,
    )


def deferred_citation_to_citation(data: CitationData, citation_number: int | None = None) -> Citation:
    """
    Convert an expanded deferred record into a Citation.

    Args:
        data: Deferred record
        citation_number: Number to assign; defaults to the record's own id

    Returns:
        Citation: Converted citation
    """
    timestamps = None
    if data.timestamps is not None and (data.timestamps.start_time or data.timestamps.end_time):
        timestamps = Timestamps(start_time=data.timestamps.start_time, end_time=data.timestamps.end_time)

    if citation_number is None and data.id is not None and data.id >= 1:
        citation_number = data.id

    return Citation(
        citation_number=citation_number,
        attachment_id=data.attachment_id or None,
        full_phrase=decode_optional_phrase(data.full_phrase),
        anchor_text=decode_optional_phrase(data.anchor_text),
        page_number=parse_page_number(data.page_id),
        start_page_key=normalize_page_key(data.page_id),
        line_ids=tuple(data.line_ids) if data.line_ids else None,
        reasoning=decode_optional_phrase(data.reasoning),
        timestamps=timestamps,
    )


def extract_deferred_citations(llm_response: str) -> list[Citation]:
    """Return every record of the deferred block as a Citation, in payload order."""
    parsed = parse_deferred_citation_response(llm_response)
    if not parsed.success:
        return []
    return [deferred_citation_to_citation(data) for data in parsed.citations]


def get_all_citations_from_deferred_response(llm_response: str) -> dict[str, Citation]:
    """
    Extract keyed citations from a deferred block alone.

    Records without a full phrase are skipped. Citation numbers come
    from the records' own ids.

    Returns:
        dict[str, Citation]: Citation key -> citation, first occurrence kept
    """
    parsed = parse_deferred_citation_response(llm_response)
    citations: dict[str, Citation] = {}
    if not parsed.success:
        return citations

    for data in parsed.citations:
        citation = deferred_citation_to_citation(data)
        if citation.full_phrase:
            citations.setdefault(generate_citation_key(citation), citation)
    return citations


def has_deferred_citations(response: Any) -> bool:
    """Return True when the response contains a deferred block start sentinel."""
    return isinstance(response, str) and get_settings().parsing.deferred_start_delimiter in response


def extract_visible_text(llm_response: str) -> str:
    """Return the response text before the deferred block, trimmed."""
    return parse_deferred_citation_response(llm_response).visible_text


def replace_deferred_markers(
    text: str,
    citation_map: Mapping[int, CitationData] | None = None,
    show_anchor_text: bool = False,
    replacer: Callable[[int, CitationData | None], str] | None = None,
) -> str:
    """
    Replace [N] markers in prose.

    A custom replacer takes precedence. Otherwise the marker becomes the
    record's anchor text when show_anchor_text is set and one exists, and
    is removed in every other case.

    Args:
        text: Prose containing [N] markers
        citation_map: Records by id, from parse_deferred_citation_response
        show_anchor_text: Replace markers with anchor text
        replacer: Callable receiving (id, record or None)

    Returns:
        str: Text with markers replaced
    """
    citation_map = citation_map or {}

    def _replace(match: re.Match[str]) -> str:
        marker_id = int(match.group(1))
        data = citation_map.get(marker_id)
        if replacer is not None:
            return replacer(marker_id, data)
        if show_anchor_text and data is not None and data.anchor_text:
            return data.anchor_text
        return ""

    return _MARKER.sub(_replace, text)


def get_citation_marker_ids(text: str) -> list[int]:
    """Return the ids of all [N] markers in order of appearance."""
    return [int(match.group(1)) for match in _MARKER.finditer(text)]
