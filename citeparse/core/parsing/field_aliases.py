"""
Field normalizer.

Producers have spelled every citation field several ways over time:
camelCase, snake_case, deprecated names (keySpan, fileId) and
Markdown-escaped snake_case (attachment\\_id). FIELD_ALIASES lists, per
canonical field, the recognized spellings in priority order; lookups take
the first spelling present.

Dependencies: None
System role: Canonical field mapping for tag attributes and JSON objects
"""

from collections.abc import Mapping
from typing import Any


def _escaped(name: str) -> str:
    return name.replace("_", "\\_")


def _spellings(*names: str) -> tuple[str, ...]:
    """Expand names with their backslash-escaped variants, keeping priority order."""
    expanded: list[str] = list(names)
    for name in names:
        if "_" in name:
            expanded.append(_escaped(name))
    return tuple(expanded)


# camelCase before snake_case, current names before deprecated ones.
FIELD_ALIASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("attachment_id", _spellings("attachmentId", "attachment_id", "fileId", "file_id")),
    ("full_phrase", _spellings("fullPhrase", "full_phrase")),
    ("anchor_text", _spellings("anchorText", "anchor_text", "keySpan", "key_span")),
    (
        "start_page_key",
        _spellings(
            "startPageKey",
            "start_page_key",
            "startPageId",
            "start_page_id",
            "pageKey",
            "page_key",
            "pageId",
            "page_id",
        ),
    ),
    ("page_number", _spellings("pageNumber", "page_number")),
    ("line_ids", _spellings("lineIds", "line_ids")),
    ("reasoning", ("reasoning",)),
    ("value", ("value",)),
    ("timestamps", ("timestamps", "timestamp")),
    ("citation_number", _spellings("citationNumber", "citation_number")),
)

_ALIAS_TABLE: dict[str, tuple[str, ...]] = dict(FIELD_ALIASES)

# Lower-cased spelling -> canonical, used to recognize attribute names in tags.
_CANONICAL_BY_SPELLING: dict[str, str] = {
    spelling.replace("\\", "").lower(): canonical
    for canonical, spellings in FIELD_ALIASES
    for spelling in spellings
}

PHRASE_FIELDS: tuple[str, ...] = _ALIAS_TABLE["full_phrase"]

# Fields that make an object look like a citation when they accompany a phrase.
CITATION_MARKER_FIELDS: tuple[str, ...] = (
    _ALIAS_TABLE["start_page_key"] + _ALIAS_TABLE["line_ids"] + _ALIAS_TABLE["anchor_text"]
)


def canonical_name(attribute_name: str) -> str | None:
    """
    Map any recognized spelling to its canonical field name.

    Matching ignores case and Markdown escaping, so ATTACHMENT_ID and
    attachment\\_id both resolve to attachment_id.

    Returns:
        str | None: Canonical name, or None for unknown attributes
    """
    return _CANONICAL_BY_SPELLING.get(attribute_name.replace("\\", "").lower())


def is_known_attribute(attribute_name: str) -> bool:
    """Return True when the name is a spelling of a canonical field."""
    return canonical_name(attribute_name) is not None


def lookup_field(raw: Mapping[str, Any], canonical: str) -> Any:
    """
    Return the value of the highest-priority spelling present in raw.

    None values count as absent so that an explicit null under the
    preferred spelling does not hide a populated alternative.
    """
    for spelling in _ALIAS_TABLE[canonical]:
        value = raw.get(spelling)
        if value is not None:
            return value
    return None


def normalize_fields(raw: Mapping[str, Any]) -> dict[str, Any]:
    """
    Collapse a raw attribute map (or JSON object) onto canonical names.

    Exact alias spellings are resolved first in table priority order.
    Remaining keys are matched case-insensitively (tags written as
    FULL_PHRASE or Full_Phrase) and only fill fields still missing.
    Unrecognized and non-string keys are dropped.

    Args:
        raw: Attribute name -> value mapping

    Returns:
        dict[str, Any]: Canonical field -> value for every field present
    """
    normalized: dict[str, Any] = {}
    for canonical, _ in FIELD_ALIASES:
        value = lookup_field(raw, canonical)
        if value is not None:
            normalized[canonical] = value

    for key, value in raw.items():
        if value is None or not isinstance(key, str):
            continue
        canonical = canonical_name(key)
        if canonical is not None and canonical not in normalized:
            normalized[canonical] = value
    return normalized
