"""Model for generation history entry."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from utils.suid import get_suid


class HistoryEntry(BaseModel):
    """Model representing one past generation.

    Attributes:
        id: Unique entry identification (UUID4).
        prompt: The prompt the code was generated for.
        code: The generated code.
        language: Target language of the generated code.
        timestamp: Time the entry was created, timezone aware (UTC).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=get_suid)
    prompt: str
    code: str
    language: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
