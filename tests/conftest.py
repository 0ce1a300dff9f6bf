"""
Shared test fixtures and configuration for entire test suite.

Provides: Settings cache reset, environment isolation, sample LLM output
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import os

import pytest

from citeparse.configs import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Clear CITEPARSE_* environment variables and the settings cache.

    Tests that need different settings set environment variables with
    monkeypatch and call get_settings.cache_clear() themselves.
    """
    for name in list(os.environ):
        if name.upper().startswith("CITEPARSE_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def basic_cite_tag() -> str:
    """Well-formed self-closing document citation tag."""
    return (
        "<cite attachment_id='file123456789012345' "
        "start_page_key='page_number_2_index_0' "
        "full_phrase='important text' key_span='important' line_ids='1,2' />"
    )


@pytest.fixture
def llm_answer(basic_cite_tag: str) -> str:
    """Prose answer with one inline citation tag."""
    return f"The report highlights this {basic_cite_tag} in its summary."


@pytest.fixture
def grouped_deferred_response() -> str:
    """Answer with a deferred citation block grouped by attachment id."""
    return (
        "Revenue grew 45% [1].\n\n"
        "<<<CITATION_DATA>>>\n"
        '{ "srcA": [ {"id": 1, "full_phrase": "x", "anchor_text": "y"} ] }\n'
        "<<<END_CITATION_DATA>>>"
    )
