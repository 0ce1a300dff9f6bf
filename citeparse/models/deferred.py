"""
Deferred citation block schemas.

A deferred block is a JSON payload appended after the visible answer,
between sentinel lines, that carries citation records referenced from the
prose by [N] markers. Records may use compact single-letter keys; they
are expanded to the full names below before validation.

Dependencies: pydantic
System role: Deferred citation data structures
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class DeferredTimestamps(BaseModel):
    """Time range inside a deferred record."""

    model_config = ConfigDict(extra="ignore")

    start_time: str | None = Field(
        default=None,
        validation_alias=AliasChoices("start_time", "startTime", "s"),
    )
    end_time: str | None = Field(
        default=None,
        validation_alias=AliasChoices("end_time", "endTime", "e"),
    )


class CitationData(BaseModel):
    """One expanded deferred citation record."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = Field(default=None, description="Marker number used in the prose ([N])")
    attachment_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("attachment_id", "attachmentId"),
    )
    reasoning: str | None = None
    full_phrase: str | None = Field(
        default=None,
        validation_alias=AliasChoices("full_phrase", "fullPhrase"),
    )
    anchor_text: str | None = Field(
        default=None,
        validation_alias=AliasChoices("anchor_text", "anchorText", "key_span", "keySpan"),
    )
    page_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("page_id", "pageId", "start_page_key", "startPageKey"),
    )
    line_ids: list[int] | None = Field(
        default=None,
        validation_alias=AliasChoices("line_ids", "lineIds"),
    )
    timestamps: DeferredTimestamps | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_int(cls, value: Any) -> int | None:
        # An unusable id leaves the record unnumbered instead of invalid.
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None

    @field_validator("page_id", mode="before")
    @classmethod
    def _page_id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("line_ids", mode="before")
    @classmethod
    def _line_ids_from_any(cls, value: Any) -> Any:
        from citeparse.core.parsing.coercers import parse_line_ids

        if value is None:
            return None
        if isinstance(value, (str, list, tuple)):
            parsed = parse_line_ids(value)
            return list(parsed) if parsed else None
        return value


class ParsedCitationResponse(BaseModel):
    """
    Result of splitting an LLM response into prose and deferred citations.

    Attributes:
        visible_text: Response text before the start sentinel, trimmed
        citations: Expanded citation records in payload order
        citation_map: Records indexed by their numeric id
        success: False when the payload could not be decoded
        error: Decode failure description when success is False
    """

    visible_text: str = ""
    citations: list[CitationData] = Field(default_factory=list)
    citation_map: dict[int, CitationData] = Field(default_factory=dict)
    success: bool = True
    error: str | None = None
