"""
Test suite for the JSON-citation extractor.

Tests the citation-shape heuristic, field mapping from JSON objects and
the recursion rules of walk_json (candidates, strings, depth, cycles).

System role: Verification of structured citation discovery
"""

import pytest

from citeparse.core.parsing.json_extractor import (
    extract_json_citations,
    is_citation_shaped,
    parse_json_citation,
    walk_json,
)
from citeparse.models.citation import Timestamps


class TestIsCitationShaped:
    """Test suite for the shape heuristic."""

    @pytest.mark.parametrize(
        ("obj", "expected"),
        [
            ({"fullPhrase": "x"}, True),
            ({"full_phrase": "x", "lineIds": [1]}, True),
            ({"full_phrase": ""}, False),
            ({"lineIds": [1], "startPageKey": "1_0"}, False),
            ({"fullPhrase": 5}, False),
            ("fullPhrase", False),
            (None, False),
            ([{"fullPhrase": "x"}], False),
        ],
    )
    def test_is_citation_shaped(self, obj, expected) -> None:
        assert is_citation_shaped(obj) is expected


class TestParseJsonCitation:
    """Test suite for parse_json_citation."""

    def test_should_map_all_fields(self) -> None:
        """Test camelCase JSON maps onto Citation fields."""
        # Act
        citation = parse_json_citation({
            "attachmentId": "a",
            "fullPhrase": "p",
            "anchorText": "k",
            "startPageKey": "page_number_3_index_1",
            "lineIds": [3, 1, 2],
            "reasoning": "r",
        })

        # Assert
        assert citation.attachment_id == "a"
        assert citation.full_phrase == "p"
        assert citation.anchor_text == "k"
        assert citation.page_number == 3
        assert citation.start_page_key == "page_number_3_index_1"
        assert citation.line_ids == (1, 2, 3)
        assert citation.reasoning == "r"

    def test_should_use_page_number_without_page_key(self) -> None:
        citation = parse_json_citation({"fullPhrase": "p", "pageNumber": 4})

        assert citation.page_number == 4
        assert citation.start_page_key == "page_number_4_index_0"

    def test_should_parse_timestamp_objects(self) -> None:
        citation = parse_json_citation(
            {"fullPhrase": "p", "timestamps": {"startTime": "00:01", "endTime": "00:02"}}
        )

        assert citation.timestamps == Timestamps(start_time="00:01", end_time="00:02")

    def test_should_ignore_uncoercible_values(self) -> None:
        """Test a wrongly typed field is dropped, not raised."""
        citation = parse_json_citation({"fullPhrase": "p", "lineIds": {"a": 1}, "pageNumber": 1.5})

        assert citation.full_phrase == "p"
        assert citation.line_ids is None
        assert citation.page_number is None

    def test_should_not_trust_embedded_number(self) -> None:
        assert parse_json_citation({"fullPhrase": "p", "citationNumber": 9}).citation_number is None

    def test_non_citation_returns_none(self) -> None:
        assert parse_json_citation({"lineIds": [1]}) is None


class TestWalkJson:
    """Test suite for walk_json recursion rules."""

    def test_should_follow_citation_properties(self) -> None:
        """Test citations nested under citation/citations at any depth are found."""
        value = {
            "answer": "text",
            "data": {
                "citations": [
                    {"fullPhrase": "a"},
                    {"citation": {"fullPhrase": "b"}},
                ]
            },
        }

        citations = extract_json_citations(value)

        assert [c.full_phrase for c in citations] == ["a", "b"]

    def test_should_not_shape_test_other_properties(self) -> None:
        """Test a citation-shaped object under an unrecognized property is skipped."""
        assert extract_json_citations({"source": {"fullPhrase": "x"}}) == []

    def test_root_array_and_nulls(self) -> None:
        citations = extract_json_citations([None, {"fullPhrase": "a"}, 5, True, {"full_phrase": "b"}])

        assert [c.full_phrase for c in citations] == ["a", "b"]

    def test_citation_object_is_a_leaf(self) -> None:
        value = {"fullPhrase": "outer", "citations": [{"fullPhrase": "inner"}]}

        assert [c.full_phrase for c in extract_json_citations(value)] == ["outer"]

    def test_citation_object_strings_are_still_visited(self) -> None:
        """Test strings under a citation object reach on_string without shape-testing its children."""
        found: list[str] = []
        strings: list[str] = []
        value = {"fullPhrase": "outer", "reasoning": "why", "citations": [{"fullPhrase": "inner"}]}

        walk_json(value, lambda obj: found.append(obj["fullPhrase"]), strings.append)

        assert found == ["outer"]
        assert strings == ["outer", "why", "inner"]

    def test_should_decode_phrase_like_fields(self) -> None:
        citation = parse_json_citation(
            {"fullPhrase": "a **bold**\nclaim", "anchorText": "&lt;b&gt;", "reasoning": "r\\_s"}
        )

        assert citation.full_phrase == "a bold claim"
        assert citation.anchor_text == "<b>"
        assert citation.reasoning == "r_s"

    def test_should_visit_strings_in_order(self) -> None:
        strings: list[str] = []

        walk_json({"a": "x", "b": ["y", {"c": "z"}], "d": 3}, lambda obj: None, strings.append)

        assert strings == ["x", "y", "z"]

    def test_string_root_is_visited(self) -> None:
        strings: list[str] = []

        walk_json("plain", lambda obj: None, strings.append)

        assert strings == ["plain"]

    def test_should_stop_at_depth_limit(self) -> None:
        """Test descent stops silently past max_depth."""
        # Arrange
        value: dict = {"fullPhrase": "deep"}
        for _ in range(5):
            value = {"citation": value}
        shallow: list = []
        deep: list = []

        # Act
        walk_json(value, shallow.append, max_depth=2)
        walk_json(value, deep.append, max_depth=10)

        # Assert
        assert shallow == []
        assert deep == [{"fullPhrase": "deep"}]

    def test_should_not_loop_on_cycles(self) -> None:
        value: dict = {"citations": []}
        value["citations"].append(value)

        assert extract_json_citations(value) == []
