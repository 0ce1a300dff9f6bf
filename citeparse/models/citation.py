"""
Citation domain model.

Represents a span of text that an AI-generated answer claims is backed by
a location in a source document (page and lines) or in an audio/video
clip (time range).

Python attributes are snake_case; serialization aliases are the camelCase
names producers and consumers exchange, so
citation.model_dump(by_alias=True, exclude_none=True) round-trips through
the JSON extractor.

Dependencies: pydantic
System role: Citation data structure
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Timestamps(BaseModel):
    """Time range of an audio/video citation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start_time: str | None = Field(default=None, alias="startTime", description="Range start, e.g. 00:01:30.000")
    end_time: str | None = Field(default=None, alias="endTime", description="Range end, e.g. 00:02:45.000")


class Citation(BaseModel):
    """Immutable citation record produced by the extraction pipeline."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    citation_number: int | None = Field(
        default=None,
        ge=1,
        alias="citationNumber",
        description="1-based discovery order within one extraction call",
    )
    attachment_id: str | None = Field(
        default=None,
        alias="attachmentId",
        description="Identifier of the source document or media",
    )
    full_phrase: str | None = Field(
        default=None,
        alias="fullPhrase",
        description="Quoted text claimed to appear in the source",
    )
    anchor_text: str | None = Field(
        default=None,
        alias="anchorText",
        description="Sub-span of full_phrase to emphasize",
    )
    page_number: int | None = Field(
        default=None,
        ge=0,
        alias="pageNumber",
        description="1-based page number in the source",
    )
    start_page_key: str | None = Field(
        default=None,
        alias="startPageKey",
        description="Normalized page key (page_number_<N>_index_<M>)",
    )
    line_ids: tuple[int, ...] | None = Field(
        default=None,
        alias="lineIds",
        description="Line numbers within the page, ascending and unique",
    )
    reasoning: str | None = Field(default=None, description="Producer's justification for the citation")
    timestamps: Timestamps | None = Field(default=None, description="Time range for AV citations")

    @field_validator("line_ids")
    @classmethod
    def _sorted_unique_line_ids(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        if not value:
            return None
        return tuple(sorted(set(value)))

    @property
    def is_av_citation(self) -> bool:
        """True when the citation locates content by time range."""
        return self.timestamps is not None

    @property
    def is_document_citation(self) -> bool:
        """True when the citation locates content by page or lines."""
        return self.timestamps is None and (self.page_number is not None or self.line_ids is not None)

    @property
    def has_identity(self) -> bool:
        """True when the citation carries a phrase or a time range to verify."""
        return bool(self.full_phrase) or self.timestamps is not None


class CitationParseResult(BaseModel):
    """
    Single-occurrence parse of a text fragment.

    Attributes:
        before_text: Text preceding the matched tag
        after_text: Text following the matched tag (after </cite> when present)
        citation: Parsed citation; every field is None when no tag was found
    """

    model_config = ConfigDict(frozen=True)

    before_text: str = ""
    after_text: str = ""
    citation: Citation = Field(default_factory=Citation)
