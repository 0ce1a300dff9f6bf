"""
Core business logic module.

Contains the exception hierarchy, the citation extraction pipeline
(citeparse.core.parsing) and the helpers built on its results: citation
keys, verification status, grouping, tag replacement and LLM output
workarounds.
"""

from citeparse.core.exceptions import (
    CiteParseException,
    CoercionError,
    DeferredBlockError,
)

__all__ = [
    "CiteParseException",
    "CoercionError",
    "DeferredBlockError",
]
