"""
Pydantic schemas for API request/response models.
"""
from app.schemas.suggestion import (
    Platform,
    Tier,
    UpsellMode,
    Suggestion,
    SuggestionCategory,
    AnalyzeRequest,
    AnalyzeResponse,
)

__all__ = [
    "Platform",
    "Tier",
    "UpsellMode",
    "Suggestion",
    "SuggestionCategory",
    "AnalyzeRequest",
    "AnalyzeResponse",
]
