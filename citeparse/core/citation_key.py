"""
Citation key generation.

The key is a 16-character content fingerprint used as the result mapping
key and as a stable render key. It depends only on the citation's
content, never on its number or the path that discovered it.

Dependencies: hashlib (stdlib)
System role: Citation identity
"""

import hashlib

from citeparse.models.citation import Citation

CITATION_KEY_LENGTH = 16


def generate_citation_key(citation: Citation) -> str:
    """
    Compute the content key of a citation.

    Parts are attachment id, full phrase, and for AV citations the start
    and end time; absent parts contribute an empty string. Two document
    citations therefore share a key exactly when they share phrase and
    attachment id.

    Args:
        citation: Citation to fingerprint

    Returns:
        str: First 16 hex digits of the SHA-1 of the joined parts
    """
    timestamps = citation.timestamps
    parts = [
        citation.attachment_id or "",
        citation.full_phrase or "",
        (timestamps.start_time or "") if timestamps else "",
        (timestamps.end_time or "") if timestamps else "",
    ]
    digest = hashlib.sha1("|".join(parts).encode("utf-8")).hexdigest()
    return digest[:CITATION_KEY_LENGTH]
