"""Extract code from free-form model reply.

The extraction is a precision cascade, the most specific signal wins:

1. fenced code block tagged with the target language
2. any fenced code block
3. text starting at the first line that looks like code
4. the whole reply
"""

import re
from typing import Optional

from pydantic import BaseModel

from log import get_logger

logger = get_logger(__name__)

# opening fence with optional info string, content up to closing fence or end
# of text (replies cut by max_tokens limit are not closed); the closing fence
# may also end the last line of code
FENCED_BLOCK_PATTERN = re.compile(
    r"^[ \t]*```[ \t]*(?P<tag>[^\n`]*)\n(?P<body>.*?)(?:^[ \t]*```|```[ \t]*$|\Z)",
    re.DOTALL | re.MULTILINE,
)

# alternative fence tags used by models for the same language
LANGUAGE_ALIASES = {
    "python": frozenset({"py", "python3"}),
    "javascript": frozenset({"js", "jsx", "node"}),
    "typescript": frozenset({"ts", "tsx"}),
    "markdown": frozenset({"md"}),
    "html": frozenset({"htm", "xhtml"}),
    "shell": frozenset({"sh", "bash", "zsh"}),
    "yaml": frozenset({"yml"}),
}

GENERIC_CODE_START_PATTERNS = (
    re.compile(r"<!DOCTYPE", re.IGNORECASE),
    re.compile(r"<html\b", re.IGNORECASE),
    re.compile(r"<\?xml\b"),
    re.compile(r"<!--"),
    re.compile(r"(async\s+)?def\s+\w+"),
    re.compile(r"class\s+\w+"),
    re.compile(r"import\s+[\w{*'\"]"),
    re.compile(r"from\s+[\w.]+\s+import\s"),
    re.compile(r"(export\s+)?(async\s+)?function\b"),
    re.compile(r"(export\s+)?interface\s+\w+"),
    re.compile(r"(const|let|var)\s+\w+"),
    re.compile(r"package\s+[\w.]+"),
    re.compile(r"(pub\s+)?fn\s+\w+"),
    re.compile(r"#include\b"),
    re.compile(r"#!"),
    re.compile(r"//"),
    re.compile(r"/\*"),
    re.compile(r"\{"),
    re.compile(r"\[\s*$"),
    re.compile(r".*\{\s*$"),
)

LANGUAGE_CODE_START_PATTERNS = {
    "python": (re.compile(r"@\w+"), re.compile(r"if\s+__name__\s*==")),
    "css": (re.compile(r":root\b"), re.compile(r"@(media|import|font-face)\b")),
    "sql": (
        re.compile(r"(SELECT|CREATE|INSERT|UPDATE|DELETE|WITH)\b", re.IGNORECASE),
    ),
    "markdown": (re.compile(r"#{1,6}\s+\S"),),
}


class ExtractedCode(BaseModel):
    """Code extracted from model reply.

    Attributes:
        code: The extracted code, trimmed.
        explanation: Prose preceding the first code block, if any.
    """

    code: str
    explanation: Optional[str] = None


def language_tags(language: str) -> frozenset[str]:
    """Return all fence tags accepted for given language, lowercased."""
    language = language.lower()
    return LANGUAGE_ALIASES.get(language, frozenset()) | {language}


def looks_like_code_start(line: str, language: str) -> bool:
    """Check if given line looks like the first line of code."""
    stripped = line.strip()
    if not stripped:
        return False
    patterns = GENERIC_CODE_START_PATTERNS + LANGUAGE_CODE_START_PATTERNS.get(
        language.lower(), ()
    )
    return any(pattern.match(stripped) for pattern in patterns)


class ResponseExtractor:
    """Best-effort extraction of code from model reply. Never raises."""

    def extract(self, text: str, language: str) -> ExtractedCode:
        """Extract code for the target language from the reply text."""
        if not text:
            return ExtractedCode(code="")

        blocks = list(FENCED_BLOCK_PATTERN.finditer(text))
        if blocks:
            explanation = text[: blocks[0].start()].strip() or None
            tags = language_tags(language)
            for block in blocks:
                tag = block.group("tag").strip().split(maxsplit=1)
                if tag and tag[0].lower() in tags:
                    logger.debug("Found code block tagged as %s", tag[0])
                    return ExtractedCode(
                        code=block.group("body").strip(), explanation=explanation
                    )
            logger.debug("No code block tagged as %s, using first one", language)
            return ExtractedCode(
                code=blocks[0].group("body").strip(), explanation=explanation
            )

        lines = text.splitlines()
        for index, line in enumerate(lines):
            if looks_like_code_start(line, language):
                logger.debug("No code block found, code starts at line %d", index)
                explanation = "\n".join(lines[:index]).strip() or None
                return ExtractedCode(
                    code="\n".join(lines[index:]).strip(), explanation=explanation
                )

        logger.debug("No code detected, using the whole reply")
        return ExtractedCode(code=text.strip())
