"""Unit tests for functions defined in src/generation/fallback.py."""

import json

import constants
from generation.fallback import (
    OFFLINE_SNIPPETS,
    escape_prompt,
    offline_result,
    offline_snippet,
)


def test_offline_snippet_for_each_known_language(subtests) -> None:
    """Test that every known language snippet embeds the prompt."""
    for language in OFFLINE_SNIPPETS:
        with subtests.test(msg=language, language=language):
            snippet = offline_snippet("weather dashboard", language)
            assert "weather dashboard" in snippet
            assert "__PROMPT__" not in snippet


def test_offline_snippet_is_deterministic() -> None:
    """Test that the same input produces the same snippet."""
    assert offline_snippet("a", "python") == offline_snippet("a", "python")


def test_offline_snippet_unknown_language() -> None:
    """Test the generic snippet used for other languages."""
    snippet = offline_snippet("parse logs", "rust")
    assert snippet == (
        "// Generated rust code for: parse logs\nconsole.log('Hello, World!');"
    )


def test_offline_snippet_json_stays_valid() -> None:
    """Test that prompt with quotes keeps JSON snippet valid."""
    snippet = offline_snippet('say "hi"\nplease', "json")
    document = json.loads(snippet)
    assert document["description"] == 'say "hi"\nplease'


def test_offline_snippet_python_stays_valid() -> None:
    """Test that prompt with triple quotes keeps Python snippet valid."""
    snippet = offline_snippet('print """x""" \\', "python")
    compile(snippet, "<snippet>", "exec")


def test_escape_prompt() -> None:
    """Test prompt escaping for languages with comment or markup syntax."""
    assert escape_prompt("a */ b", "css") == "a * / b"
    assert escape_prompt("<b>", "html") == "&lt;b&gt;"
    assert escape_prompt("one\ntwo", "javascript") == "one two"
    assert escape_prompt("text", "markdown") == "text"


def test_offline_result() -> None:
    """Test that offline result is flagged as degraded."""
    result = offline_result("todo app", "html", "some/model")
    assert result.degraded is True
    assert result.from_cache is False
    assert result.provider_used == constants.OFFLINE_PROVIDER_ID
    assert result.model_used == "some/model"
    assert result.language == "html"
    assert "todo app" in result.code
