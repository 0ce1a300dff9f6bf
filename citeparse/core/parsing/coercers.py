"""
Value coercers.

Turn raw attribute strings (or loosely typed JSON values) into the typed
values carried by a Citation: page numbers from composite page keys,
line-id sets from comma/range syntax, decoded phrase text, attachment
ids and timestamp pairs.

Malformed values coerce to None. A CoercionError is raised only when a
helper is called with a Python type it does not accept at all, which the
extractors never do.

Dependencies: citeparse.configs, citeparse.models
System role: Typed value parsing for citation fields
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from citeparse.configs import get_settings
from citeparse.core.exceptions import CoercionError
from citeparse.models.citation import Timestamps

_COMPACT_PAGE_KEY = re.compile(r"^\s*(\d+)_(\d+)\s*$")
_PAGE_KEY = re.compile(r"page[_a-zA-Z]*?(\d+)(?:_index_(\d+))?", re.IGNORECASE)

_LINE_ID_NOISE = re.compile(r"[\[\](){}]")
_LINE_RANGE = re.compile(r"^(\d+)\s*-\s*(\d+)$")
_LINE_SINGLE = re.compile(r"^\d+$")

_HTML_ENTITIES = {
    "&lt;": "<",
    "&gt;": ">",
    "&amp;": "&",
    "&quot;": '"',
    "&apos;": "'",
}
_HTML_ENTITY = re.compile(r"&(?:lt|gt|amp|quot|apos);")
_MD_BOLD_STARS = re.compile(r"\*\*(.+?)\*\*", re.DOTALL)
_MD_BOLD_UNDERSCORES = re.compile(r"__(.+?)__", re.DOTALL)
_MD_ITALIC = re.compile(r"\*(\S(?:.*?\S)?)\*", re.DOTALL)
_ESCAPED_QUOTE = re.compile(r"\\+(['\"])")
_NEWLINES = re.compile(r"(?:\r\n|\r|\n|\\r\\n|\\n)+")


def unescape_underscores(text: str) -> str:
    """Undo Markdown underscore escaping (attachment\\_id -> attachment_id)."""
    return text.replace("\\_", "_")


def parse_page_number(page_key: Any) -> int | None:
    """
    Extract the 1-based page number from a composite page key.

    Accepts page_number_<N>_index_<M>, pageKey_<N>_index_<M>, any
    page<letters/underscores><N> prefix, and the compact <N>_<M> form.
    Page 0 with index 0 is treated as page 1.

    Args:
        page_key: Page key string; ints are taken as the page number itself

    Returns:
        int | None: Page number, or None when absent or unparseable
    """
    parsed = _parse_page_key(page_key)
    return parsed[0] if parsed else None


def normalize_page_key(page_key: Any) -> str | None:
    """Return the canonical page_number_<N>_index_<M> form of a page key."""
    parsed = _parse_page_key(page_key)
    if parsed is None:
        return None
    page, index = parsed
    return f"page_number_{page}_index_{index}"


def _parse_page_key(page_key: Any) -> tuple[int, int] | None:
    if page_key is None:
        return None
    if isinstance(page_key, bool):
        raise CoercionError("Page key must be a string or int", field="start_page_key")
    if isinstance(page_key, int):
        return (page_key, 0) if page_key >= 0 else None
    if not isinstance(page_key, str):
        raise CoercionError(
            f"Page key must be a string or int, got {type(page_key).__name__}",
            field="start_page_key",
        )

    text = unescape_underscores(page_key)
    match = _COMPACT_PAGE_KEY.match(text) or _PAGE_KEY.search(text)
    if not match:
        return None
    page = int(match.group(1))
    index = int(match.group(2)) if match.group(2) is not None else 0
    if page == 0 and index == 0:
        page = 1
    return page, index


def _expand_range(start: int, end: int) -> list[int]:
    """Expand an inclusive range, sampling evenly when it is oversized."""
    settings = get_settings().parsing
    size = end - start + 1
    if size <= settings.max_line_range_size:
        return list(range(start, end + 1))

    samples = [start]
    sample_count = min(settings.line_range_sample_count - 2, size - 2)
    if sample_count > 0:
        step = max(1, (end - start) // (sample_count + 1))
        for i in range(1, sample_count + 1):
            sample = start + step * i
            if sample < end:
                samples.append(sample)
    samples.append(end)
    return samples


def _line_ids_from_string(text: str) -> list[int]:
    ids: list[int] = []
    for token in _LINE_ID_NOISE.sub("", text).split(","):
        token = token.strip()
        if not token:
            continue
        range_match = _LINE_RANGE.match(token)
        if range_match:
            start, end = int(range_match.group(1)), int(range_match.group(2))
            # Descending ranges keep only their start.
            ids.extend(_expand_range(start, end) if start <= end else [start])
        elif _LINE_SINGLE.match(token):
            ids.append(int(token))
    return ids


def parse_line_ids(value: Any) -> tuple[int, ...] | None:
    """
    Parse line ids into an ascending tuple of unique positive integers.

    Strings are comma-separated tokens, each a single integer or an
    inclusive A-B range; whitespace is ignored and non-numeric tokens are
    dropped. Iterables (the JSON form) may mix ints and such strings.

    Examples:
        "5,2,8,1,3" -> (1, 2, 3, 5, 8)
        "1,5-7,10" -> (1, 5, 6, 7, 10)
        "" -> None

    Returns:
        tuple[int, ...] | None: Line ids, or None when nothing valid remains
    """
    if value is None:
        return None
    if isinstance(value, str):
        ids = _line_ids_from_string(value)
    elif isinstance(value, Iterable) and not isinstance(value, (bytes, Mapping)):
        ids = []
        for item in value:
            if isinstance(item, bool):
                continue
            if isinstance(item, int):
                ids.append(item)
            elif isinstance(item, float) and item.is_integer():
                ids.append(int(item))
            elif isinstance(item, str):
                ids.extend(_line_ids_from_string(item))
    else:
        raise CoercionError(
            f"Line ids must be a string or an iterable, got {type(value).__name__}",
            field="line_ids",
        )

    unique = sorted({line_id for line_id in ids if line_id > 0})
    return tuple(unique) if unique else None


def decode_html_entities(text: str) -> str:
    """Decode the five XML entities in a single pass (&amp;lt; -> &lt;)."""
    return _HTML_ENTITY.sub(lambda match: _HTML_ENTITIES[match.group(0)], text)


def strip_markdown_emphasis(text: str) -> str:
    """Remove bold (**x**, __x__) and italic (*x*) markers, keeping the inner text."""
    text = _MD_BOLD_STARS.sub(r"\1", text)
    text = _MD_BOLD_UNDERSCORES.sub(r"\1", text)
    return _MD_ITALIC.sub(r"\1", text)


def decode_phrase(text: Any) -> str | None:
    """
    Decode a phrase-like attribute value.

    Steps, in order: HTML entities, Markdown emphasis markers, escaped
    quotes, then literal and escaped newlines to single spaces. Other
    whitespace is preserved.

    Args:
        text: Raw attribute value

    Returns:
        str | None: Decoded text, or None for None input
    """
    if text is None:
        return None
    if not isinstance(text, str):
        raise CoercionError(f"Phrase must be a string, got {type(text).__name__}", field="full_phrase")

    decoded = unescape_underscores(text)
    decoded = decode_html_entities(decoded)
    decoded = strip_markdown_emphasis(decoded)
    decoded = _ESCAPED_QUOTE.sub(r"\1", decoded)
    return _NEWLINES.sub(" ", decoded)


def decode_optional_phrase(text: str | None) -> str | None:
    """Decode a phrase-like value, treating an empty result as absent."""
    if not text:
        return None
    return decode_phrase(text) or None


def resolve_attachment_id(tag_id: str | None, fallback: str | None = None) -> str | None:
    """
    Choose between the tag's attachment id and a caller-supplied fallback.

    A tag id of exactly the platform id length is trusted as-is. Any
    other tag id defers to a non-empty fallback; with no fallback (or
    None) the tag id is used whatever its length.
    """
    if tag_id and len(tag_id) == get_settings().parsing.attachment_id_length:
        return tag_id
    return fallback or tag_id


def parse_timestamps(value: Any) -> Timestamps | None:
    """
    Parse an AV time range.

    Strings have the form <start>-<end> and are split at the first "-"
    (timestamps never contain one). Mappings may use start_time/end_time,
    startTime/endTime or the compact s/e keys.

    Returns:
        Timestamps | None: Parsed range, or None when empty
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip().strip("'\"")
        if not text:
            return None
        start, _, end = text.partition("-")
        return Timestamps(start_time=start.strip() or None, end_time=end.strip() or None)
    if isinstance(value, Mapping):
        start = _first_present(value, ("start_time", "startTime", "s"))
        end = _first_present(value, ("end_time", "endTime", "e"))
        if start is None and end is None:
            return None
        return Timestamps(
            start_time=None if start is None else str(start),
            end_time=None if end is None else str(end),
        )
    raise CoercionError(
        f"Timestamps must be a string or mapping, got {type(value).__name__}",
        field="timestamps",
    )


def _first_present(mapping: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if mapping.get(key) is not None:
            return mapping[key]
    return None


def parse_citation_number(value: Any) -> int | None:
    """Return value as a positive int, or None when it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
        return number if number >= 1 else None
    return None
