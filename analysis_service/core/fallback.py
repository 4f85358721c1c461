"""
Rule-based interpretation used when the model reply can't be parsed, or as
the only engine when ANALYSIS_ENGINE=offline.

Plain keyword matching over the dream body. Always returns a schema-valid
Insights with at least three themes.
"""
from typing import List

from analysis_service.core.insights import Insights, Theme

MIN_THEMES = 3

# (keywords, theme, mood tags)
KEYWORD_THEMES = [
    (
        ("water", "ocean", "river"),
        Theme(symbol="Water", interpretation="Water often reflects your emotional state and the flow of feelings in your life."),
        ["emotional", "flowing"],
    ),
    (
        ("flying", "falling"),
        Theme(symbol="Flight/Falling", interpretation="Flying or falling can point to a sense of freedom, or to a fear of losing control."),
        ["adventurous", "anxious"],
    ),
    (
        ("house", "home", "room"),
        Theme(symbol="Home/House", interpretation="Houses and rooms tend to represent the self and the different parts of your inner life."),
        ["reflective", "secure"],
    ),
    (
        ("chase", "running"),
        Theme(symbol="Pursuit", interpretation="Being chased or running suggests something in waking life you may be avoiding."),
        ["anxious", "determined"],
    ),
]

GENERIC_THEMES = [
    Theme(symbol="Personal Journey", interpretation="The dream reflects where you are right now and the changes you are moving through."),
    Theme(symbol="Subconscious Processing", interpretation="Your mind may be sorting through recent experiences and unresolved feelings."),
]
GENERIC_MOODS = ["contemplative", "curious"]

FILLER_THEME = Theme(
    symbol="Self-Reflection",
    interpretation="Take time to notice how the dream made you feel and what it might connect to in your daily life.",
)

TAKEAWAYS = [
    "Write down any feelings that stayed with you after waking.",
    "Notice whether these symbols show up again in future dreams.",
    "Consider what in your waking life might connect to this dream.",
]

DISCLAIMER = "This interpretation is for personal reflection only and is not medical or clinical advice."


def match_keyword_themes(body: str):
    text = (body or "").lower()
    themes: List[Theme] = []
    moods: List[str] = []
    for keywords, theme, theme_moods in KEYWORD_THEMES:
        if any(keyword in text for keyword in keywords):
            themes.append(theme.model_copy())
            moods.extend(theme_moods)
    return themes, moods


def generate_fallback_insights(title: str, body: str) -> Insights:
    themes, moods = match_keyword_themes(body)

    if not themes:
        themes = [theme.model_copy() for theme in GENERIC_THEMES]
        moods = list(GENERIC_MOODS)

    while len(themes) < MIN_THEMES:
        themes.append(FILLER_THEME.model_copy())

    return Insights(
        summary=f'Your dream "{title}" touches on themes worth reflecting on. '
                "The images and feelings in it may mirror what is on your mind right now.",
        themes=themes,
        mood_tags=list(dict.fromkeys(moods)),
        takeaway=list(TAKEAWAYS),
        disclaimer=DISCLAIMER,
    )
