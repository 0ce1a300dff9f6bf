"""
Workarounds for degenerate LLM output.

Some fast models loop when asked for long structured answers, either
emitting one character over and over or repeating their last sentence
until the token limit.

Dependencies: None
System role: Pre-extraction output cleanup
"""

import re

MIN_GARBAGE_LENGTH = 64
MIN_REPETITIONS = 2
MIN_SENTENCE_CONTENT_LENGTH = 10

_SENTENCE_END = re.compile(r"[.?!](?=\s+|$)")


def is_repetitive_garbage(content: str | None) -> bool:
    """Return True when the trimmed content is at least 64 copies of one character."""
    if not content:
        return False
    trimmed = content.strip()
    return len(trimmed) >= MIN_GARBAGE_LENGTH and len(set(trimmed)) == 1


def clean_repeating_last_sentence(text: str) -> str:
    """
    Collapse a final sentence repeated back to back into a single copy.

    The repeating unit is the text between the last two sentence
    terminators; it must hold at least 10 characters and occur at least
    twice in a row at the end of the text. Text without such a run is
    returned trimmed but otherwise unchanged.

    Example:
        "Intro. It rains a lot. It rains a lot. It rains a lot."
        -> "Intro. It rains a lot."
    """
    text = text.strip()
    ends = [match.start() for match in _SENTENCE_END.finditer(text)]
    if len(ends) < 2:
        return text

    last_end, previous_end = ends[-1], ends[-2]
    unit = text[previous_end + 1:last_end + 1]
    if len(unit.strip()[:-1]) < MIN_SENTENCE_CONTENT_LENGTH:
        return text
    if len(text) < len(unit) * MIN_REPETITIONS:
        return text

    check_end = len(text) if text.endswith(unit) else last_end + 1
    repetitions = 0
    first_start = -1
    while check_end - len(unit) >= 0 and text[check_end - len(unit):check_end] == unit:
        repetitions += 1
        check_end -= len(unit)
        first_start = check_end

    if repetitions >= MIN_REPETITIONS:
        return text[:first_start] + unit
    return text
