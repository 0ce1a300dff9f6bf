"""
Attribute extractor.

Hand-written scanner over the attribute section of one citation tag.
LLM output routinely contains an unescaped copy of the delimiting quote
inside a value (full_phrase='the patient's chart'), so a quoted value
ends at the first matching quote that is followed by the next
attribute-looking token or by the end of the tag, not at the first
matching quote.

Dependencies: None
System role: Raw attribute parsing for citation tags
"""

import re
from enum import Enum

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_\\]*")
_WHITESPACE = re.compile(r"\s*")
_UNQUOTED_VALUE = re.compile(r"[^\s>]+?(?=\s|/>|>|$)", re.DOTALL)

# What may follow the closing quote of a value.
_VALUE_BOUNDARY = re.compile(r"\s*(?:/>|>|$)|\s+[A-Za-z_][A-Za-z0-9_\\]*\s*=", re.DOTALL)
_TAG_PREFIX = re.compile(r"^\s*<?\s*cite\b", re.IGNORECASE)


class TagEnd(str, Enum):
    """How the attribute section of a tag was terminated."""

    SELF_CLOSING = "self_closing"  # />
    OPEN = "open"  # > (body and </cite> may follow)
    UNTERMINATED = "unterminated"  # end of input or a new tag began


def _is_escaped(text: str, index: int) -> bool:
    """True when the character at index is preceded by an odd run of backslashes."""
    backslashes = 0
    index -= 1
    while index >= 0 and text[index] == "\\":
        backslashes += 1
        index -= 1
    return backslashes % 2 == 1


def _read_quoted(text: str, start: int, quote: str) -> tuple[str, int]:
    """
    Read a quoted value whose opening quote sits at start.

    Returns:
        tuple[str, int]: Raw value (escapes kept) and the index after the closing quote
    """
    first_unescaped = -1
    cursor = start + 1
    while True:
        index = text.find(quote, cursor)
        if index == -1:
            break
        if not _is_escaped(text, index):
            if first_unescaped == -1:
                first_unescaped = index
            if _VALUE_BOUNDARY.match(text, index + 1):
                return text[start + 1:index], index + 1
        cursor = index + 1

    if first_unescaped != -1:
        return text[start + 1:first_unescaped], first_unescaped + 1
    # Truncated output: the value runs to the end of the input.
    return text[start + 1:], len(text)


def scan_attributes(text: str, pos: int = 0) -> tuple[dict[str, str], int, TagEnd]:
    """
    Scan attributes starting at pos (just after the tag name).

    Args:
        text: Full input text
        pos: Index where the attribute section begins

    Returns:
        tuple: (attribute name -> raw value, index after the tag head, how it ended)
    """
    attributes: dict[str, str] = {}
    length = len(text)

    while True:
        pos = _WHITESPACE.match(text, pos).end()
        if pos >= length:
            return attributes, length, TagEnd.UNTERMINATED
        if text.startswith("/>", pos):
            return attributes, pos + 2, TagEnd.SELF_CLOSING
        char = text[pos]
        if char == ">":
            return attributes, pos + 1, TagEnd.OPEN
        if char == "<":
            return attributes, pos, TagEnd.UNTERMINATED

        name_match = _NAME.match(text, pos)
        if not name_match:
            pos += 1
            continue
        name = name_match.group(0).replace("\\_", "_")
        pos = _WHITESPACE.match(text, name_match.end()).end()
        if pos >= length or text[pos] != "=":
            # Bare word; nothing to record.
            continue

        pos = _WHITESPACE.match(text, pos + 1).end()
        if pos >= length:
            return attributes, length, TagEnd.UNTERMINATED
        if text[pos] in "'\"":
            value, pos = _read_quoted(text, pos, text[pos])
        else:
            value_match = _UNQUOTED_VALUE.match(text, pos)
            if not value_match:
                continue
            value, pos = value_match.group(0), value_match.end()
        attributes[name] = value


def extract_attributes(tag_text: str) -> dict[str, str]:
    """
    Extract attribute name -> raw value pairs from one tag occurrence.

    Accepts a whole tag ("<cite a='1' />"), a tag missing its "<", or a
    bare attribute list. Quote styles may be mixed; attribute order is
    irrelevant and unknown attributes are kept. Escaped quotes stay in
    the raw value and are unescaped by decode_phrase.

    Args:
        tag_text: Text of one tag occurrence

    Returns:
        dict[str, str]: Attribute values as written (later duplicates win)
    """
    prefix = _TAG_PREFIX.match(tag_text)
    attributes, _, _ = scan_attributes(tag_text, prefix.end() if prefix else 0)
    return attributes
