"""Tests for the field normalizer alias table."""

from citeparse.core.parsing.field_aliases import (
    canonical_name,
    is_known_attribute,
    lookup_field,
    normalize_fields,
)


class TestNormalizeFields:
    """Tests for normalize_fields precedence rules."""

    def test_camel_case_wins_over_snake_case(self) -> None:
        """fullPhrase takes precedence over full_phrase."""
        fields = normalize_fields({"full_phrase": "snake", "fullPhrase": "camel"})
        assert fields["full_phrase"] == "camel"

    def test_current_name_wins_over_deprecated(self) -> None:
        """anchor_text takes precedence over key_span."""
        fields = normalize_fields({"key_span": "old", "anchor_text": "new"})
        assert fields["anchor_text"] == "new"

    def test_attachment_id_wins_over_file_id(self) -> None:
        """attachmentId takes precedence over fileId."""
        fields = normalize_fields({"fileId": "f", "attachmentId": "a"})
        assert fields["attachment_id"] == "a"

    def test_backslash_escaped_spelling(self) -> None:
        """Markdown-escaped snake_case resolves to the canonical field."""
        fields = normalize_fields({"attachment\\_id": "abc", "start\\_page\\_key": "2_0"})
        assert fields == {"attachment_id": "abc", "start_page_key": "2_0"}

    def test_case_insensitive_fallback(self) -> None:
        """Oddly cased names fill fields that are otherwise missing."""
        fields = normalize_fields({"FULL_PHRASE": "x", "LineIds": "1"})
        assert fields == {"full_phrase": "x", "line_ids": "1"}

    def test_none_does_not_hide_alternative(self) -> None:
        """An explicit None under the preferred spelling is treated as absent."""
        fields = normalize_fields({"fullPhrase": None, "full_phrase": "x"})
        assert fields["full_phrase"] == "x"

    def test_unknown_keys_dropped(self) -> None:
        """Keys outside the alias table do not appear in the result."""
        assert normalize_fields({"foo": "bar", "value": "v"}) == {"value": "v"}

    def test_non_string_keys_dropped(self) -> None:
        """Keys that are not strings are ignored instead of raising."""
        assert normalize_fields({1: "x", None: "y", "fullPhrase": "p"}) == {"full_phrase": "p"}


class TestAliasLookups:
    """Tests for canonical_name, is_known_attribute and lookup_field."""

    def test_canonical_name(self) -> None:
        assert canonical_name("keySpan") == "anchor_text"
        assert canonical_name("FILE_ID") == "attachment_id"
        assert canonical_name("pageId") == "start_page_key"
        assert canonical_name("nope") is None

    def test_is_known_attribute(self) -> None:
        assert is_known_attribute("start\\_page\\_key")
        assert is_known_attribute("timestamp")
        assert not is_known_attribute("class")

    def test_lookup_field_priority(self) -> None:
        raw = {"page_id": "3_0", "startPageKey": "page_number_1_index_0"}
        assert lookup_field(raw, "start_page_key") == "page_number_1_index_0"
