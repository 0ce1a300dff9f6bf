"""
Verification status derivation.

Maps a verification's search status onto the four display flags used by
renderers. Partial matches (text found on another page or line, only the
first word, or only part of the text) count as verified as well as
partial. Unknown statuses are treated as still pending.

Dependencies: citeparse.models
System role: Verification display state
"""

from collections.abc import Mapping
from typing import Any

from citeparse.models.verification import CitationStatus, SearchStatus, Verification

MISS_STATUSES = frozenset({SearchStatus.NOT_FOUND.value})

PARTIAL_STATUSES = frozenset({
    SearchStatus.PARTIAL_TEXT_FOUND.value,
    SearchStatus.FOUND_ON_OTHER_PAGE.value,
    SearchStatus.FOUND_ON_OTHER_LINE.value,
    SearchStatus.FIRST_WORD_FOUND.value,
})

FULL_MATCH_STATUSES = frozenset({
    SearchStatus.FOUND.value,
    SearchStatus.FOUND_ANCHOR_TEXT_ONLY.value,
    SearchStatus.FOUND_KEY_SPAN_ONLY.value,
    SearchStatus.FOUND_VALUE_ONLY.value,
    SearchStatus.FOUND_PHRASE_MISSED_VALUE.value,
    SearchStatus.FOUND_PHRASE_MISSED_ANCHOR_TEXT.value,
})

MISS_INDICATOR = "❌"
VERIFIED_INDICATOR = "☑️"
PARTIAL_INDICATOR = "✅"
PENDING_INDICATOR = "⌛"
UNKNOWN_INDICATOR = "◌"


def _status_of(verification: Verification | Mapping[str, Any] | None) -> str | None:
    if verification is None:
        return None
    if isinstance(verification, Mapping):
        verification = Verification.model_validate(verification)
    status = verification.status
    if isinstance(status, SearchStatus):
        return status.value
    return status


def get_citation_status(verification: Verification | Mapping[str, Any] | None) -> CitationStatus:
    """
    Derive display flags from a verification.

    Args:
        verification: Verification record, its dict form, or None when no
            verification has arrived yet

    Returns:
        CitationStatus: is_verified, is_miss, is_partial_match, is_pending
    """
    status = _status_of(verification)

    is_miss = status in MISS_STATUSES
    is_partial_match = status in PARTIAL_STATUSES
    is_verified = status in FULL_MATCH_STATUSES or is_partial_match
    is_pending = not (is_miss or is_verified)

    return CitationStatus(
        is_verified=is_verified,
        is_miss=is_miss,
        is_partial_match=is_partial_match,
        is_pending=is_pending,
    )


def get_verification_text_indicator(verification: Verification | Mapping[str, Any] | None) -> str:
    """Return a one-character plain-text status indicator for a verification."""
    status = get_citation_status(verification)
    if status.is_miss:
        return MISS_INDICATOR
    if status.is_verified and not status.is_partial_match:
        return VERIFIED_INDICATOR
    if status.is_partial_match:
        return PARTIAL_INDICATOR
    if status.is_pending:
        return PENDING_INDICATOR
    return UNKNOWN_INDICATOR
