"""
Unit tests for the suggestion engine rules, ordering and caps.
"""
import pytest

from app.schemas.suggestion import Platform, SuggestionCategory, Tier, UpsellMode
from app.services.suggestion_engine import (
    CONTEXT_ADDITION,
    DETAIL_ADDITION,
    EXPLAIN_ADDITION,
    FORMAT_ADDITION,
    VAGUE_TERMS,
    apply,
    cap_for,
    generate,
)


def ids(suggestions):
    return [s.id for s in suggestions]


def by_id(suggestions, suggestion_id):
    return next(s for s in suggestions if s.id == suggestion_id)


class TestBasicRules:
    """Rules evaluated for every tier."""

    def test_fix_this_thing_free(self):
        """Vague term, too short and missing punctuation all fire; upsell is cut by the cap."""
        result = generate("fix this thing", "chatgpt", "free")

        assert ids(result) == ["clarity-1", "specificity-1", "structure-2"]
        assert by_id(result, "clarity-1").replacement == "fix this specific item"
        assert by_id(result, "specificity-1").addition == DETAIL_ADDITION
        assert by_id(result, "structure-2").replacement == "fix this thing."

    def test_empty_text_only_too_short_fires(self):
        for platform in Platform:
            result = generate("", platform, Tier.FREE)
            assert ids(result) == ["specificity-1"]

    def test_none_text_treated_as_empty(self):
        assert ids(generate(None, "claude", "free")) == ["specificity-1"]

    def test_vague_terms_case_insensitive_whole_word(self):
        text = "Thing and STUFF but not something or stuffing"
        result = generate(text, Platform.UNKNOWN, Tier.FREE)

        clarity = by_id(result, "clarity-1")
        assert clarity.category is SuggestionCategory.CLARITY
        assert clarity.replacement == "specific item and specific item but not something or stuffing"
        assert VAGUE_TERMS.search(clarity.replacement) is None

    def test_substring_without_whole_word_does_not_fire(self):
        result = generate("Summarize everything about stuffing recipes please.", "unknown", "free")
        assert "clarity-1" not in ids(result)

    def test_too_short_boundary(self):
        assert "specificity-1" in ids(generate("a" * 19, "unknown", "free"))
        assert "specificity-1" not in ids(generate("a" * 20, "unknown", "free"))

    @pytest.mark.parametrize("ending", [".", "?", "!"])
    def test_terminal_punctuation_suppresses_structure(self, ending):
        result = generate("what is the capital of France" + ending, "unknown", "free")
        assert "structure-2" not in ids(result)

    def test_single_word_never_needs_punctuation(self):
        assert "structure-2" not in ids(generate("hello", "unknown", "free"))

    def test_punctuation_suggestion_does_not_refire_after_apply(self):
        text = "tell me about black holes"
        first = generate(text, "unknown", "free")
        punctuated = apply(text, by_id(first, "structure-2"))

        assert punctuated == "tell me about black holes."
        assert "structure-2" not in ids(generate(punctuated, "unknown", "free"))


class TestPremiumRules:
    """Platform-specific and advanced rules."""

    def test_chatgpt_step_by_step(self, long_prompt):
        result = generate(long_prompt, Platform.CHATGPT, Tier.PREMIUM)

        assert ids(result) == ["structure-2", "structure-1", "enhancement-3", "enhancement-4"]
        assert by_id(result, "structure-1").replacement == (
            long_prompt + " Please provide a step-by-step explanation."
        )

    def test_chatgpt_step_by_step_already_requested(self):
        text = "Walk me through configuring nginx as a reverse proxy, Step By Step."
        assert "structure-1" not in ids(generate(text, "chatgpt", "premium"))

    def test_claude_reasoning_prefix(self, long_prompt):
        result = generate(long_prompt, Platform.CLAUDE, Tier.PREMIUM)

        assert ids(result) == ["structure-2", "enhancement-1", "enhancement-3", "enhancement-4"]
        assert by_id(result, "enhancement-1").replacement == "Think carefully about this: " + long_prompt

    def test_claude_rule_skipped_when_think_present(self):
        text = "What do you think the best sorting algorithm is for nearly sorted data?"
        assert "enhancement-1" not in ids(generate(text, "claude", "premium"))

    def test_gemini_explanation(self, long_prompt):
        result = generate(long_prompt, Platform.GEMINI, Tier.PREMIUM)

        assert ids(result) == ["structure-2", "enhancement-2", "enhancement-3", "enhancement-4"]
        assert by_id(result, "enhancement-2").addition == EXPLAIN_ADDITION

    def test_platform_rules_need_enough_length(self):
        text = "short question for the assistant"  # 32 characters
        assert "structure-1" not in ids(generate(text, "chatgpt", "premium"))
        assert "enhancement-1" in ids(generate(text, "claude", "premium"))
        assert "enhancement-2" not in ids(generate(text, "gemini", "premium"))

    def test_shouting_prompt(self):
        result = generate("SHOUT AT ME!", Platform.UNKNOWN, Tier.PREMIUM)

        tone = by_id(result, "tone-1")
        assert tone.category is SuggestionCategory.TONE
        assert tone.replacement == "shout at me."
        # Rule 3 sees the original text, which ends in "!"
        assert "structure-2" not in ids(result)
        assert ids(result) == ["specificity-1", "tone-1"]

    def test_all_caps_without_exclamation(self):
        result = generate("HELLO THERE ASSISTANT", "unknown", "premium")
        assert by_id(result, "tone-1").replacement == "hello there assistant"

    def test_format_and_context_additions(self, long_prompt):
        result = generate(long_prompt, Platform.UNKNOWN, Tier.PREMIUM)

        assert ids(result) == ["structure-2", "enhancement-3", "enhancement-4"]
        assert by_id(result, "enhancement-3").addition == FORMAT_ADDITION
        assert by_id(result, "enhancement-4").addition == CONTEXT_ADDITION

    def test_format_and_context_keywords_suppress(self):
        text = (
            "Given the background of our migration, please structure a plan for moving "
            "every service to the new cluster without downtime for customers"
        )
        result = generate(text, "unknown", "premium")
        assert "enhancement-3" not in ids(result)
        assert "enhancement-4" not in ids(result)

    def test_premium_rules_never_fire_for_free(self, long_prompt):
        for platform in Platform:
            result = generate(long_prompt + "!", platform, Tier.FREE)
            assert all(s.id in {"clarity-1", "specificity-1", "structure-2", "upgrade-prompt"} for s in result)

    def test_unrecognized_platform_is_unknown(self, long_prompt):
        assert generate(long_prompt, "bing", "premium") == generate(long_prompt, Platform.UNKNOWN, "premium")


class TestCapsAndUpsell:

    def test_caps(self):
        assert cap_for(Tier.FREE) == 3
        assert cap_for("premium") == 8
        assert cap_for("platinum") == 3

    @pytest.mark.parametrize("text", [
        "",
        "fix this thing",
        "SHOUT AT ME!",
        "Thing stuff thing STUFF",
        " ".join(["stuff"] * 40),
    ])
    def test_results_never_exceed_cap(self, text):
        for platform in Platform:
            assert len(generate(text, platform, Tier.FREE)) <= 3
            assert len(generate(text, platform, Tier.PREMIUM)) <= 8

    def test_truncation_keeps_earliest(self, long_prompt):
        full = generate(long_prompt, "chatgpt", "premium")
        capped = generate(long_prompt, "chatgpt", "premium", caps={Tier.PREMIUM: 2})

        assert capped == full[:2]

    def test_upsell_dropped_in_append_mode(self):
        result = generate("fix this thing", "chatgpt", "free", upsell_mode=UpsellMode.APPEND)
        assert "upgrade-prompt" not in ids(result)

    def test_upsell_visible_with_larger_free_cap(self):
        result = generate("fix this thing", "chatgpt", "free", caps={Tier.FREE: 4})

        assert ids(result) == ["clarity-1", "specificity-1", "structure-2", "upgrade-prompt"]
        assert result[-1].is_informational

    def test_upsell_reserve_mode_takes_last_slot(self):
        result = generate("fix this thing", "chatgpt", "free", upsell_mode="reserve")

        assert ids(result) == ["clarity-1", "specificity-1", "upgrade-prompt"]

    def test_upsell_needs_more_than_two(self):
        # Only too-short and missing punctuation fire
        result = generate("fix it now", "unknown", "free", upsell_mode=UpsellMode.RESERVE)
        assert ids(result) == ["specificity-1", "structure-2"]

    def test_no_upsell_for_premium(self):
        result = generate("fix this thing", "chatgpt", "premium", upsell_mode=UpsellMode.RESERVE)
        assert "upgrade-prompt" not in ids(result)

    def test_unknown_upsell_mode_falls_back_to_append(self):
        assert generate("fix this thing", "unknown", "free", upsell_mode="sideways") == \
            generate("fix this thing", "unknown", "free")


class TestPurity:

    def test_deterministic(self, long_prompt):
        for tier in Tier:
            assert generate(long_prompt, "gemini", tier) == generate(long_prompt, "gemini", tier)

    def test_ids_unique_within_result(self):
        for text in ["fix this thing", "SHOUT THING!", " ".join(["stuff"] * 40)]:
            for platform in Platform:
                result = generate(text, platform, Tier.PREMIUM)
                assert len(ids(result)) == len(set(ids(result)))

    def test_at_most_one_edit_per_suggestion(self, long_prompt):
        for suggestion in generate(long_prompt + " thing", "claude", "premium"):
            assert suggestion.replacement is None or suggestion.addition is None
