"""
Tag-span locator.

Finds citation tag occurrences in free text. Three shapes are accepted:

    <cite ... />                      self-closing
    <cite ...>content</cite>          enclosed content (discarded from the citation)
    <cite ...>                        opened but never closed

Streaming LLM output sometimes loses the leading "<". A bare "cite" is
still accepted when it is not preceded by a letter (so "excite" and
"recite" never match) and is followed by a recognized attribute name.

Dependencies: None
System role: Citation tag discovery in text
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from citeparse.core.parsing.attributes import TagEnd, scan_attributes
from citeparse.core.parsing.field_aliases import is_known_attribute

_TAG_START = re.compile(
    r"<cite(?![A-Za-z0-9_\-])"
    r"|(?<![A-Za-z<])cite(?=\s+(?P<attr>[A-Za-z_][A-Za-z0-9_\\]*)\s*=)",
    re.IGNORECASE,
)
_END_TAG = re.compile(r"</cite\s*>", re.IGNORECASE)


@dataclass(frozen=True)
class TagSpan:
    """
    One located citation tag.

    Attributes:
        start: Offset of the tag start ("<" or the bare "cite")
        end: Offset just past the tag (past </cite> when one closes it)
        attributes: Raw attribute values from the tag head
        body: Enclosed content between ">" and "</cite>", empty otherwise
        self_closing: True for the "/>" form
        has_bracket: False when the leading "<" was missing
    """

    start: int
    end: int
    attributes: dict[str, str] = field(default_factory=dict)
    body: str = ""
    self_closing: bool = False
    has_bracket: bool = True


def _next_tag_start(text: str, pos: int) -> re.Match[str] | None:
    """Return the next accepted tag start at or after pos."""
    while True:
        match = _TAG_START.search(text, pos)
        if match is None:
            return None
        attribute = match.group("attr")
        if attribute is None or is_known_attribute(attribute):
            return match
        pos = match.end()


def iter_tag_spans(text: str) -> Iterator[TagSpan]:
    """
    Yield every citation tag in text, left to right, without overlap.

    The generator holds no state beyond its own position, so each call
    restarts from the beginning of the text.

    Args:
        text: Text to scan

    Yields:
        TagSpan: Located tag occurrences
    """
    if not text:
        return

    match = _next_tag_start(text, 0)
    while match is not None:
        start = match.start()
        attributes, head_end, tag_end = scan_attributes(text, match.end())

        end = head_end
        body = ""
        following = _next_tag_start(text, head_end)
        if tag_end is TagEnd.OPEN:
            closing = _END_TAG.search(text, head_end)
            if closing is not None and (following is None or closing.start() < following.start()):
                body = text[head_end:closing.start()]
                end = closing.end()

        yield TagSpan(
            start=start,
            end=end,
            attributes=attributes,
            body=body,
            self_closing=tag_end is TagEnd.SELF_CLOSING,
            has_bracket=text.startswith("<", start),
        )
        match = following
