import pytest

from analysis_service.core.fallback import (
    DISCLAIMER, FILLER_THEME, GENERIC_THEMES, TAKEAWAYS, generate_fallback_insights,
)


def symbols(insights):
    return [theme.symbol for theme in insights.themes]


def test_falling_into_water_matches_both_themes():
    insights = generate_fallback_insights("Falling", "I was falling from a bridge into water")

    assert "Water" in symbols(insights)
    assert "Flight/Falling" in symbols(insights)
    assert set(["emotional", "flowing", "adventurous", "anxious"]) <= set(insights.mood_tags)
    assert len(insights.takeaway) == 3
    assert len(insights.themes) >= 3


def test_keywords_are_case_insensitive():
    insights = generate_fallback_insights("Sea", "The OCEAN was endless")

    assert symbols(insights)[0] == "Water"


def test_mood_tags_are_deduplicated():
    # Flight/Falling and Pursuit both contribute "anxious"
    insights = generate_fallback_insights("Run", "I was running from a chase and then falling")

    assert insights.mood_tags.count("anxious") == 1
    assert len(insights.mood_tags) == len(set(insights.mood_tags))


def test_all_keyword_sets():
    insights = generate_fallback_insights("Everything", "water, flying, my old house, a chase")

    assert symbols(insights) == ["Water", "Flight/Falling", "Home/House", "Pursuit"]


def test_no_match_uses_generic_themes_and_pads():
    insights = generate_fallback_insights("Blank", "A quiet grey afternoon")

    assert symbols(insights) == [t.symbol for t in GENERIC_THEMES] + [FILLER_THEME.symbol]
    assert insights.mood_tags


def test_single_match_is_padded_to_three():
    insights = generate_fallback_insights("Home", "I was back in my childhood room")

    assert symbols(insights) == ["Home/House", FILLER_THEME.symbol, FILLER_THEME.symbol]


@pytest.mark.parametrize("body", ["", "x", "water " * 500, "🌙 moon"])
def test_always_schema_valid(body):
    insights = generate_fallback_insights("Any", body)

    assert len(insights.themes) >= 3
    assert len(insights.mood_tags) == len(set(insights.mood_tags))
    assert insights.takeaway == TAKEAWAYS
    assert insights.disclaimer == DISCLAIMER


def test_summary_interpolates_title():
    insights = generate_fallback_insights("The Lighthouse", "light")

    assert '"The Lighthouse"' in insights.summary
