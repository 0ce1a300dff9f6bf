"""
Best-effort repair of deferred citation JSON.

LLMs writing the deferred block routinely wrap it in a Markdown code
fence, leave Markdown escapes (\\_) inside strings, add trailing commas,
or stop before the final brackets. repair_json fixes those defects so the
payload can be decoded; it never validates the result.

Dependencies: None
System role: JSON payload recovery for the deferred-block extractor
"""

import re

_CODE_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CODE_FENCE_CLOSE = re.compile(r"\s*```$")
# Valid escapes are matched first so that only a lone backslash is dropped.
_ESCAPE = re.compile(r"\\(?:u[0-9a-fA-F]{4}|[\"\\/bfnrt])|\\")
_TRAILING_COMMA = re.compile(r",(\s*[\]}])")

_CLOSERS = {"[": "]", "{": "}"}


def _drop_invalid_escapes(text: str) -> str:
    return _ESCAPE.sub(lambda match: match.group(0) if len(match.group(0)) > 1 else "", text)


def _missing_closers(text: str) -> tuple[bool, str]:
    """Return (inside_string, closers) needed to balance text, outside strings only."""
    stack: list[str] = []
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif stack and char == stack[-1]:
            stack.pop()
    return in_string, "".join(reversed(stack))


def repair_json(text: str) -> tuple[str, list[str]]:
    """
    Repair common LLM JSON defects.

    Args:
        text: Raw payload between the deferred sentinels

    Returns:
        tuple[str, list[str]]: Repaired text and the names of the repairs
        applied, in order (empty when nothing changed)
    """
    repairs: list[str] = []
    repaired = text.strip()

    unfenced = _CODE_FENCE_CLOSE.sub("", _CODE_FENCE_OPEN.sub("", repaired))
    if unfenced != repaired:
        repairs.append("code_fence")
        repaired = unfenced

    unescaped = _drop_invalid_escapes(repaired)
    if unescaped != repaired:
        repairs.append("invalid_escape")
        repaired = unescaped

    in_string, closers = _missing_closers(repaired)
    if in_string:
        repairs.append("unterminated_string")
        repaired += '"'
    if closers:
        repairs.append("unclosed_brackets")
        repaired += closers

    # Runs after closing so that "[1, 2," ends up as "[1, 2]".
    uncomma = _TRAILING_COMMA.sub(r"\1", repaired)
    if uncomma != repaired:
        repairs.append("trailing_comma")
        repaired = uncomma

    return repaired, repairs
