"""
Citation parsing configuration settings.

Tunable constants of the extraction pipeline: the attachment id length
heuristic, recursion and range-expansion bounds, and the deferred block
sentinels.

Dependencies: pydantic, citeparse.configs.base
System role: Parser configuration
"""

from pydantic import Field

from citeparse.configs.base import CiteParseBaseSettings


class ParsingSettings(CiteParseBaseSettings):
    """Citation parsing configuration."""

    attachment_id_length: int = Field(
        default=20,
        ge=1,
        description="Length of a host-platform attachment id; tag ids of this length win over fallbacks",
    )
    max_json_depth: int = Field(
        default=32,
        ge=1,
        description="Maximum nesting depth walked when searching JSON values for citations",
    )
    max_line_range_size: int = Field(
        default=1000,
        ge=2,
        description="Line ranges larger than this are sampled instead of fully expanded",
    )
    line_range_sample_count: int = Field(
        default=50,
        ge=2,
        description="Number of line ids kept when sampling an oversized range (ends included)",
    )
    deferred_start_delimiter: str = Field(
        default="<<<CITATION_DATA>>>",
        min_length=1,
        description="Sentinel opening a deferred citation data block",
    )
    deferred_end_delimiter: str = Field(
        default="<<<END_CITATION_DATA>>>",
        min_length=1,
        description="Sentinel closing a deferred citation data block (optional in input)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level used by configure_logging (DEBUG, INFO, WARNING, ERROR)",
    )
