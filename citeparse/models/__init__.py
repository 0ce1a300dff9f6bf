"""
Data models for citations, deferred citation blocks and verifications.
"""

from citeparse.models.citation import Citation, CitationParseResult, Timestamps
from citeparse.models.deferred import CitationData, DeferredTimestamps, ParsedCitationResponse
from citeparse.models.verification import CitationStatus, SearchStatus, Verification

__all__ = [
    "Citation",
    "CitationData",
    "CitationParseResult",
    "CitationStatus",
    "DeferredTimestamps",
    "ParsedCitationResponse",
    "SearchStatus",
    "Timestamps",
    "Verification",
]
