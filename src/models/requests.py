"""Models for generation requests."""

import hashlib
import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

import constants


class GenerationRequest(BaseModel):
    """Model representing a request to generate code from natural-language prompt.

    The request is immutable once created. Only `prompt`, `language` and
    `model_id` are semantically significant for deduplication, see
    `fingerprint`.

    Attributes:
        prompt: The natural-language description of the code to generate.
        language: Target language identifier, like "python" or "html".
        model_id: Model to ask first.
        api_key: The optional key for upstream providers.
        web_search: Whether to enrich the prompt with web search results.
        reference_content: The optional content of a reference file.
        website_url: The optional URL of a website to redesign.

    Example:
        ```python
        request = GenerationRequest(prompt="Todo list app", language="html")
        ```
    """

    prompt: str = Field(
        description="The natural-language description of the code to generate",
        examples=["Create a responsive landing page for a coffee shop"],
    )

    language: str = Field(
        constants.DEFAULT_LANGUAGE,
        description="Target language identifier",
        examples=["html", "python", "typescript"],
    )

    model_id: str = Field(
        constants.DEFAULT_MODEL_ID,
        description="Model to ask first",
        examples=[constants.DEFAULT_MODEL_ID],
    )

    api_key: Optional[SecretStr] = Field(
        None,
        description="The optional API key passed to upstream providers",
        examples=["hf_xxxxxxxx"],
    )

    web_search: bool = Field(
        False,
        description="Whether to enrich the prompt with web search results",
    )

    reference_content: Optional[str] = Field(
        None,
        description="The optional content of a reference file",
        examples=["<html><body>old page</body></html>"],
    )

    website_url: Optional[str] = Field(
        None,
        description="The optional URL of a website to redesign",
        examples=["https://example.com"],
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "prompt": "Create a todo list app with local storage",
                    "language": "html",
                    "model_id": constants.DEFAULT_MODEL_ID,
                    "web_search": False,
                },
                {
                    "prompt": "Parse a CSV file and print column averages",
                    "language": "python",
                    "model_id": constants.DEFAULT_MODEL_ID,
                    "reference_content": "name,price\nfoo,1.5\nbar,2.5",
                },
            ]
        },
    )

    @field_validator("prompt")
    @classmethod
    def check_prompt(cls, value: str) -> str:
        """Reject prompts with no content."""
        if not value.strip():
            raise ValueError("Prompt must not be empty")
        return value

    @field_validator("language")
    @classmethod
    def normalize_language(cls, value: str) -> str:
        """Store language identifier in lowercase form."""
        value = value.strip().lower()
        if not value:
            raise ValueError("Language must not be empty")
        return value

    @field_validator("model_id")
    @classmethod
    def check_model_id(cls, value: str) -> str:
        """Reject empty model identification."""
        value = value.strip()
        if not value:
            raise ValueError("Model ID must not be empty")
        return value

    @property
    def fingerprint(self) -> str:
        """Return deterministic hash of the semantically significant fields."""
        payload = json.dumps(
            [self.prompt, self.language, self.model_id], ensure_ascii=False
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def get_api_key(self) -> Optional[str]:
        """Return the API key as plain text, None when missing or blank."""
        if self.api_key is None:
            return None
        key = self.api_key.get_secret_value().strip()
        return key or None
