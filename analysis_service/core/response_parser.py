import json
import re

from pydantic import ValidationError

from analysis_service.core.errors import AnalysisParseError
from analysis_service.core.insights import Insights

# Greedy: first "{" through last "}"
JSON_SPAN = re.compile(r"\{[\s\S]*\}")


def extract_json_span(text: str) -> str:
    match = JSON_SPAN.search(text or "")
    if not match:
        raise AnalysisParseError("No JSON found in response")
    return match.group(0)


def parse_insights(text: str) -> Insights:
    """
    Pull the JSON object out of a model reply (the model may wrap it in
    prose or code fences) and validate it against the Insights schema.
    """
    span = extract_json_span(text)
    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        raise AnalysisParseError(f"Invalid JSON in response: {e.msg}") from e
    except RecursionError as e:
        raise AnalysisParseError("Response JSON is nested too deeply") from e

    try:
        return Insights.model_validate(data)
    except ValidationError as e:
        raise AnalysisParseError(f"Response does not match insights schema: {e.error_count()} errors") from e
