"""
Prompt suggestion engine.

A fixed, ordered sequence of string-pattern rules. Each rule looks at the
input text and contributes at most one Suggestion; the order in which rules
fire is the ranking of the result. Premium-only rules are skipped for the
free tier, and results are cut to the tier's cap as a stable prefix.

The engine is a pure function: no I/O, no shared state, never raises.
"""
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from app.schemas.suggestion import (
    Platform,
    Suggestion,
    SuggestionCategory,
    Tier,
    UpsellMode,
)

DEFAULT_CAPS: Dict[Tier, int] = {
    Tier.FREE: 3,
    Tier.PREMIUM: 8,
}

# Free tier: number of basic suggestions that must already exist before the upsell notice fires
UPSELL_THRESHOLD = 2

VAGUE_TERMS = re.compile(r"\b(thing|stuff)\b", re.IGNORECASE)
TERMINAL_PUNCTUATION = (".", "?", "!")

SPECIFIC_ITEM = "specific item"
DETAIL_ADDITION = " Please provide a detailed explanation with examples."
STEP_BY_STEP_ADDITION = " Please provide a step-by-step explanation."
REASONING_PREFIX = "Think carefully about this: "
EXPLAIN_ADDITION = " Please explain this in detail with relevant examples."
FORMAT_ADDITION = " Please format your response as a numbered list."
CONTEXT_ADDITION = " Please consider the context and provide relevant background information."

PLATFORM_OPTIMIZATIONS: Dict[Platform, Dict[str, Any]] = {
    Platform.CHATGPT: {
        "preferred_structure": "step-by-step",
        "max_length": 2000,
        "suggested_phrases": ["step by step", "explain in detail", "provide examples"],
    },
    Platform.CLAUDE: {
        "preferred_structure": "reasoning-based",
        "max_length": 3000,
        "suggested_phrases": ["think about", "consider", "analyze"],
    },
    Platform.GEMINI: {
        "preferred_structure": "conversational",
        "max_length": 1500,
        "suggested_phrases": ["help me understand", "explain", "show me"],
    },
}

_HOST_PLATFORMS = (
    ("openai.com", Platform.CHATGPT),
    ("chatgpt.com", Platform.CHATGPT),
    ("google.com", Platform.GEMINI),
    ("claude.ai", Platform.CLAUDE),
)


def cap_for(tier: Union[Tier, str], caps: Optional[Mapping[Tier, int]] = None) -> int:
    """Maximum number of suggestions returned for a tier."""
    tier = Tier.parse(tier)
    return (caps or DEFAULT_CAPS).get(tier, DEFAULT_CAPS[tier])


def _basic_rules(text: str) -> List[Suggestion]:
    """Rules evaluated for every tier."""
    found = []
    length = len(text)
    word_count = len(text.split(" "))

    if VAGUE_TERMS.search(text):
        found.append(Suggestion(
            id="clarity-1",
            category=SuggestionCategory.CLARITY,
            title="Be more specific",
            description='Replace vague terms like "thing" or "stuff" with specific nouns',
            replacement=VAGUE_TERMS.sub(SPECIFIC_ITEM, text),
        ))

    if length < 20:
        found.append(Suggestion(
            id="specificity-1",
            category=SuggestionCategory.SPECIFICITY,
            title="Add more context",
            description="Provide more details to help the AI understand your request better",
            addition=DETAIL_ADDITION,
        ))

    if word_count > 1 and not text.endswith(TERMINAL_PUNCTUATION):
        found.append(Suggestion(
            id="structure-2",
            category=SuggestionCategory.STRUCTURE,
            title="Add punctuation",
            description="Proper punctuation helps AI understand sentence boundaries",
            replacement=text + ".",
        ))

    return found


def _premium_rules(text: str, platform: Platform) -> List[Suggestion]:
    """Platform-specific and advanced rules, premium tier only."""
    found = []
    length = len(text)
    lower = text.lower()

    if platform is Platform.CHATGPT and length > 50 and "step by step" not in lower:
        found.append(Suggestion(
            id="structure-1",
            category=SuggestionCategory.STRUCTURE,
            title="Request step-by-step format",
            description="ChatGPT works well with structured requests",
            replacement=text + STEP_BY_STEP_ADDITION,
        ))

    if platform is Platform.CLAUDE and length > 30 and "think" not in lower:
        found.append(Suggestion(
            id="enhancement-1",
            category=SuggestionCategory.ENHANCEMENT,
            title="Encourage reasoning",
            description="Claude responds well to prompts that ask for reasoning",
            replacement=REASONING_PREFIX + text,
        ))

    if platform is Platform.GEMINI and length > 40 and "explain" not in lower:
        found.append(Suggestion(
            id="enhancement-2",
            category=SuggestionCategory.ENHANCEMENT,
            title="Request detailed explanation",
            description="Gemini excels at providing detailed explanations",
            addition=EXPLAIN_ADDITION,
        ))

    if "!" in text or text.upper() == text:
        found.append(Suggestion(
            id="tone-1",
            category=SuggestionCategory.TONE,
            title="Soften tone",
            description="A more conversational tone often yields better results",
            replacement=text.replace("!", ".").lower(),
        ))

    if length > 100 and "format" not in lower and "structure" not in lower:
        found.append(Suggestion(
            id="enhancement-3",
            category=SuggestionCategory.ENHANCEMENT,
            title="Specify output format",
            description="Requesting a specific format improves response quality",
            addition=FORMAT_ADDITION,
        ))

    if length > 50 and "context" not in lower and "background" not in lower:
        found.append(Suggestion(
            id="enhancement-4",
            category=SuggestionCategory.ENHANCEMENT,
            title="Add context",
            description="Providing context helps AI give more relevant responses",
            addition=CONTEXT_ADDITION,
        ))

    return found


def _upsell_notice() -> Suggestion:
    return Suggestion(
        id="upgrade-prompt",
        category=SuggestionCategory.ENHANCEMENT,
        title="Unlock Premium Suggestions",
        description="Get advanced AI prompt enhancements and platform-specific optimizations",
    )


def generate(
    text: Optional[str],
    platform: Union[Platform, str, None] = Platform.UNKNOWN,
    tier: Union[Tier, str, None] = Tier.FREE,
    upsell_mode: Union[UpsellMode, str] = UpsellMode.APPEND,
    caps: Optional[Mapping[Tier, int]] = None,
) -> List[Suggestion]:
    """
    Generate ordered prompt suggestions for a piece of text.

    Args:
        text: Input text; None is treated as an empty string
        platform: Target platform; unrecognized values mean unknown
        tier: Subscription tier; unrecognized values mean free
        upsell_mode: How the free-tier upsell notice competes for the cap
        caps: Optional per-tier caps overriding DEFAULT_CAPS

    Returns:
        At most cap(tier) suggestions, earliest-produced first
    """
    text = text if isinstance(text, str) else ""
    platform = Platform.parse(platform)
    tier = Tier.parse(tier)
    try:
        upsell_mode = UpsellMode(upsell_mode)
    except ValueError:
        upsell_mode = UpsellMode.APPEND
    cap = max(cap_for(tier, caps), 0)

    suggestions = _basic_rules(text)

    if tier is Tier.PREMIUM:
        suggestions.extend(_premium_rules(text, platform))
        return suggestions[:cap]

    if len(suggestions) > UPSELL_THRESHOLD:
        if upsell_mode is UpsellMode.RESERVE and cap > 0:
            return suggestions[:cap - 1] + [_upsell_notice()]
        suggestions.append(_upsell_notice())

    return suggestions[:cap]


def apply(current_text: str, suggestion: Suggestion) -> str:
    """
    Apply one suggestion to the current text.

    A replacement wins over the current text, an addition is appended,
    and informational suggestions leave the text unchanged.
    """
    if suggestion.replacement is not None:
        return suggestion.replacement
    if suggestion.addition is not None:
        return current_text + suggestion.addition
    return current_text


def apply_all(current_text: str, suggestions: Iterable[Suggestion]) -> str:
    """Fold apply() over the suggestions in order."""
    result = current_text
    for suggestion in suggestions:
        result = apply(result, suggestion)
    return result


def detect_platform(hostname: Optional[str]) -> Platform:
    """Map a chat site's hostname to its Platform."""
    host = (hostname or "").lower()
    for marker, platform in _HOST_PLATFORMS:
        if marker in host:
            return platform
    return Platform.UNKNOWN


def get_platform_optimizations(platform: Union[Platform, str, None]) -> Dict[str, Any]:
    """Prompting hints for a platform; unknown platforms get the ChatGPT hints."""
    platform = Platform.parse(platform)
    hints = PLATFORM_OPTIMIZATIONS.get(platform, PLATFORM_OPTIMIZATIONS[Platform.CHATGPT])
    return {
        "preferred_structure": hints["preferred_structure"],
        "max_length": hints["max_length"],
        "suggested_phrases": list(hints["suggested_phrases"]),
    }
