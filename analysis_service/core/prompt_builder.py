from analysis_service.core.insights import DreamInput


def format_dream_date(dream: DreamInput) -> str:
    if dream.date is None:
        return ""
    return f"{dream.date:%B} {dream.date.day}, {dream.date.year}"


def build_prompt(dream: DreamInput) -> str:
    """Build the instruction sent to the model for a single dream."""
    dated = format_dream_date(dream)
    date_line = f"Date: {dated}\n" if dated else ""

    return f"""Analyze this dream for personal reflection (not medical advice). Provide JSON only:
{{
  "summary": "2-3 sentence summary",
  "themes": [{{"symbol":"key symbol", "interpretation":"brief meaning"}}],
  "moodTags": ["primary", "secondary", "moods"],
  "takeaway": ["actionable insight 1", "insight 2", "insight 3"],
  "disclaimer": "one sentence reminding this is not professional advice"
}}

{date_line}Dream: {dream.title} - {dream.body}"""
