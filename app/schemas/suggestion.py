"""
Pydantic schemas for prompt suggestions and the analyze endpoint.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SuggestionCategory(str, Enum):
    """Classification used for grouping suggestions in the UI."""
    CLARITY = "clarity"
    SPECIFICITY = "specificity"
    TONE = "tone"
    STRUCTURE = "structure"
    ENHANCEMENT = "enhancement"


class Platform(str, Enum):
    """AI chat product the prompt is destined for."""
    CHATGPT = "chatgpt"
    CLAUDE = "claude"
    GEMINI = "gemini"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "Platform":
        """Normalize a raw platform value; anything unrecognized is UNKNOWN."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.UNKNOWN


class Tier(str, Enum):
    """Subscription level."""
    FREE = "free"
    PREMIUM = "premium"

    @classmethod
    def parse(cls, value: Any) -> "Tier":
        """Normalize a raw tier value; anything unrecognized is FREE."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.FREE


class UpsellMode(str, Enum):
    """
    How the free-tier upsell notice interacts with the result cap.

    APPEND: append the notice, then truncate to the cap.
    RESERVE: keep cap - 1 earlier suggestions so the notice takes the last slot.
    """
    APPEND = "append"
    RESERVE = "reserve"


class Suggestion(BaseModel):
    """
    One proposed edit, or an informational notice when it carries
    neither `replacement` nor `addition`.

    Serialized with `type` as the category key.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Identifier unique within one result set")
    category: SuggestionCategory = Field(..., alias="type", description="Suggestion category")
    title: str = Field(..., description="Short human label")
    description: str = Field(..., description="Rationale shown to the user")
    replacement: Optional[str] = Field(None, description="Full text replacing the input")
    addition: Optional[str] = Field(None, description="Text appended to the input")

    @model_validator(mode="after")
    def _single_edit(self) -> "Suggestion":
        if self.replacement is not None and self.addition is not None:
            raise ValueError("A suggestion carries at most one of replacement and addition")
        return self

    @property
    def is_informational(self) -> bool:
        """True when applying this suggestion must not change the text."""
        return self.replacement is None and self.addition is None


class AnalyzeRequest(BaseModel):
    """
    Body of POST /suggestions/analyze.

    `text` is optional at the schema level so the route can answer a
    missing value with its own 400 message.
    """
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = Field(None, description="Prompt text to analyze")
    platform: Optional[str] = Field(None, description="chatgpt, claude, gemini or unknown")


class AnalyzeResponse(BaseModel):
    """Response of POST /suggestions/analyze."""
    model_config = ConfigDict(populate_by_name=True)

    suggestions: List[Suggestion]
    has_subscription: bool = Field(..., alias="hasSubscription")
    platform: Platform


class PlatformOptimizationResponse(BaseModel):
    """Prompting hints for a single platform."""

    platform: Platform
    preferred_structure: str
    max_length: int
    suggested_phrases: List[str]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "platform": "claude",
                "preferred_structure": "reasoning-based",
                "max_length": 3000,
                "suggested_phrases": ["think about", "consider", "analyze"]
            }
        }
    )


def dump_suggestions(suggestions: List[Suggestion]) -> List[Dict[str, Any]]:
    """Serialize suggestions to their wire form, omitting absent edit fields."""
    return [s.model_dump(by_alias=True, exclude_none=True, mode="json") for s in suggestions]
