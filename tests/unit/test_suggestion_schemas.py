"""
Unit tests for suggestion schemas and enum normalization.
"""
import pytest
from pydantic import ValidationError

from app.schemas.suggestion import (
    AnalyzeResponse,
    Platform,
    Suggestion,
    SuggestionCategory,
    Tier,
    dump_suggestions,
)


def test_suggestion_rejects_both_edits():
    with pytest.raises(ValidationError):
        Suggestion(
            id="bad",
            category=SuggestionCategory.CLARITY,
            title="Both",
            description="Has both edits",
            replacement="x",
            addition="y"
        )


def test_suggestion_accepts_wire_key_type():
    suggestion = Suggestion.model_validate({
        "id": "tone-1",
        "type": "tone",
        "title": "Soften tone",
        "description": "Calmer",
        "replacement": "calm."
    })
    assert suggestion.category is SuggestionCategory.TONE


def test_dump_uses_type_and_omits_absent_edits():
    suggestion = Suggestion(
        id="specificity-1",
        category=SuggestionCategory.SPECIFICITY,
        title="Add more context",
        description="More detail",
        addition=" More."
    )

    dumped = dump_suggestions([suggestion])

    assert dumped == [{
        "id": "specificity-1",
        "type": "specificity",
        "title": "Add more context",
        "description": "More detail",
        "addition": " More."
    }]


@pytest.mark.parametrize("raw,expected", [
    ("chatgpt", Platform.CHATGPT),
    ("Claude", Platform.CLAUDE),
    (" gemini ", Platform.GEMINI),
    ("bard", Platform.UNKNOWN),
    ("", Platform.UNKNOWN),
    (None, Platform.UNKNOWN),
    (42, Platform.UNKNOWN),
    (Platform.CLAUDE, Platform.CLAUDE),
])
def test_platform_parse(raw, expected):
    assert Platform.parse(raw) is expected


@pytest.mark.parametrize("raw,expected", [
    ("premium", Tier.PREMIUM),
    ("FREE", Tier.FREE),
    ("enterprise", Tier.FREE),
    (None, Tier.FREE),
])
def test_tier_parse(raw, expected):
    assert Tier.parse(raw) is expected


def test_analyze_response_serializes_camel_case():
    response = AnalyzeResponse(suggestions=[], has_subscription=True, platform=Platform.GEMINI)

    assert response.model_dump(by_alias=True, mode="json") == {
        "suggestions": [],
        "hasSubscription": True,
        "platform": "gemini"
    }
