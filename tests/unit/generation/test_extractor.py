"""Unit tests for functions defined in src/generation/extractor.py."""

import pytest

from generation.extractor import (
    ResponseExtractor,
    language_tags,
    looks_like_code_start,
)


@pytest.fixture(name="extractor")
def extractor_fixture() -> ResponseExtractor:
    """Extractor instance used by tests."""
    return ResponseExtractor()


def test_language_tagged_fence_returns_only_its_interior(
    extractor: ResponseExtractor,
) -> None:
    """Test that code block tagged with target language is extracted."""
    text = "Here is the code:\n```python\nprint('hello')\n```\nHope it helps!"
    extracted = extractor.extract(text, "python")
    assert extracted.code == "print('hello')"
    assert extracted.explanation == "Here is the code:"


def test_language_tagged_fence_wins_over_first_fence(
    extractor: ResponseExtractor,
) -> None:
    """Test that tagged block is preferred even when it is not the first one."""
    text = (
        "Install it first:\n```bash\npip install flask\n```\n"
        "Then run:\n```python\nfrom flask import Flask\n```\n"
    )
    extracted = extractor.extract(text, "python")
    assert extracted.code == "from flask import Flask"
    assert extracted.explanation == "Install it first:"


def test_language_tag_is_case_insensitive(extractor: ResponseExtractor) -> None:
    """Test that fence tag matching ignores case."""
    text = "```HTML\n<p>Hi</p>\n```"
    assert extractor.extract(text, "html").code == "<p>Hi</p>"


def test_language_alias_tag(extractor: ResponseExtractor, subtests) -> None:
    """Test that commonly used aliases are accepted as language tags."""
    cases = [
        ("py", "python"),
        ("js", "javascript"),
        ("tsx", "typescript"),
        ("md", "markdown"),
    ]
    for tag, language in cases:
        with subtests.test(msg=tag, tag=tag):
            text = f"```text\nnot this\n```\n```{tag}\ncode\n```"
            assert extractor.extract(text, language).code == "code"


def test_untagged_fence_used_when_no_tagged_one(extractor: ResponseExtractor) -> None:
    """Test that the first fenced block is used as a fallback."""
    text = "Result:\n```\nfirst\n```\n\n```css\nsecond\n```"
    extracted = extractor.extract(text, "python")
    assert extracted.code == "first"


def test_fence_with_info_string(extractor: ResponseExtractor) -> None:
    """Test that only the first word of fence info string is used as tag."""
    text = "```python title=main.py\nx = 1\n```"
    assert extractor.extract(text, "python").code == "x = 1"


def test_unterminated_fence(extractor: ResponseExtractor) -> None:
    """Test that reply cut before the closing fence is still extracted."""
    text = "```javascript\nconst x = 1;\nconsole.log(x);"
    assert extractor.extract(text, "javascript").code == "const x = 1;\nconsole.log(x);"


def test_closing_fence_on_last_code_line(extractor: ResponseExtractor) -> None:
    """Test that closing fence glued to the last line is not part of the code."""
    assert extractor.extract("```python\nprint('hi')```", "python").code == (
        "print('hi')"
    )


def test_closing_fence_on_last_code_line_before_next_block(
    extractor: ResponseExtractor,
) -> None:
    """Test that glued closing fence ends the block before the next one."""
    text = "```js\nlet a = 1;```\nThen:\n```python\nb = 2\n```"
    assert extractor.extract(text, "python").code == "b = 2"
    assert extractor.extract(text, "javascript").code == "let a = 1;"


def test_def_line_without_fences(extractor: ResponseExtractor) -> None:
    """Test that code starting with def line is returned from that line on."""
    text = "Sure, here you go:\n\ndef add(a, b):\n    return a + b\n"
    extracted = extractor.extract(text, "python")
    assert extracted.code == "def add(a, b):\n    return a + b"
    assert extracted.explanation == "Sure, here you go:"


def test_doctype_line_without_fences(extractor: ResponseExtractor) -> None:
    """Test that HTML document is recognized by its declaration."""
    text = "A simple page.\n<!DOCTYPE html>\n<html></html>"
    assert extractor.extract(text, "html").code == "<!DOCTYPE html>\n<html></html>"


def test_opening_brace_without_fences(extractor: ResponseExtractor) -> None:
    """Test that JSON document is recognized by its opening brace."""
    text = 'The configuration:\n{\n  "a": 1\n}'
    assert extractor.extract(text, "json").code == '{\n  "a": 1\n}'


def test_language_specific_code_start(extractor: ResponseExtractor) -> None:
    """Test that markdown heading is code start for markdown only."""
    text = "Here it is\n# Title\nbody"
    assert extractor.extract(text, "markdown").code == "# Title\nbody"
    assert extractor.extract(text, "python").code == "Here it is\n# Title\nbody"


def test_whole_text_when_nothing_looks_like_code(
    extractor: ResponseExtractor,
) -> None:
    """Test that the whole trimmed reply is returned as the last resort."""
    text = "  I am not able to help with this request.  \n"
    extracted = extractor.extract(text, "python")
    assert extracted.code == "I am not able to help with this request."
    assert extracted.explanation is None


def test_empty_reply(extractor: ResponseExtractor) -> None:
    """Test that empty reply does not raise."""
    extracted = extractor.extract("", "html")
    assert extracted.code == ""
    assert extracted.explanation is None


def test_language_tags() -> None:
    """Test the function language_tags."""
    assert language_tags("Python") == {"python", "py", "python3"}
    assert language_tags("rust") == {"rust"}


def test_looks_like_code_start() -> None:
    """Test the function looks_like_code_start."""
    assert looks_like_code_start("import os", "python")
    assert looks_like_code_start("  class Foo:", "python")
    assert looks_like_code_start("function foo() {", "javascript")
    assert looks_like_code_start("#include <stdio.h>", "c")
    assert not looks_like_code_start("", "python")
    assert not looks_like_code_start("Here is your code:", "python")
