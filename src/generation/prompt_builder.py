"""Build provider-ready prompt from generation request and gathered context."""

from typing import Optional

import constants
from generation.context_gatherer import GatheredContext
from models.requests import GenerationRequest
from utils.types import Messages


def get_language_directive(language: str) -> str:
    """Return style directive for given language.

    Languages without a dedicated directive get the generic one.
    """
    directive = constants.LANGUAGE_DIRECTIVES.get(language.lower())
    if directive is None:
        return constants.GENERIC_LANGUAGE_DIRECTIVE.format(language=language)
    return directive


class PromptBuilder:
    """Turns generation request into system and user message pair.

    The builder has no side effects, the same request and context always
    produce the same messages.
    """

    def __init__(self, system_prompt: Optional[str] = None) -> None:
        """Initialize the builder.

        Args:
            system_prompt: Custom system prompt replacing the default one. It
                can contain `{language}` placeholder.
        """
        self.system_prompt = system_prompt or constants.DEFAULT_SYSTEM_PROMPT

    def build_system_message(self, language: str) -> str:
        """Build the system message for given language."""
        return self.system_prompt.replace("{language}", language)

    def build_user_message(
        self, request: GenerationRequest, context: Optional[GatheredContext] = None
    ) -> str:
        """Build the user message with supplementary context blocks.

        Context blocks are appended in fixed order: reference file content,
        website content and web search context. Absent sources are omitted.
        """
        parts = [
            get_language_directive(request.language),
            f"User request: {request.prompt}",
            constants.CLOSING_INSTRUCTION,
        ]
        if context is not None:
            for header, text in (
                (constants.REFERENCE_CONTEXT_HEADER, context.reference),
                (constants.WEBSITE_CONTEXT_HEADER, context.website),
                (constants.SEARCH_CONTEXT_HEADER, context.search),
            ):
                if text:
                    parts.append(f"{header}\n{text}")
        return "\n\n".join(parts)

    def build(
        self, request: GenerationRequest, context: Optional[GatheredContext] = None
    ) -> Messages:
        """Build messages for OpenAI compatible chat completion call."""
        return [
            {"role": "system", "content": self.build_system_message(request.language)},
            {"role": "user", "content": self.build_user_message(request, context)},
        ]
