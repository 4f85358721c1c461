from unittest.mock import Mock

from analysis_service.core.insights import AnalysisResult, Insights, Theme


def make_response(status_code=200, payload=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload if payload is not None else {}
    return response


def gemini_payload(text):
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
                "index": 0,
            }
        ],
    }


def sample_insights():
    return Insights(
        summary="A dream about falling into calm water.",
        themes=[
            Theme(symbol="Water", interpretation="Emotions"),
            Theme(symbol="Bridge", interpretation="Transition"),
            Theme(symbol="Falling", interpretation="Letting go"),
        ],
        mood_tags=["calm", "anxious"],
        takeaway=["Rest", "Reflect", "Write it down"],
    )


def sample_result(model="gemini-1.5-flash-latest", fallback_used=False):
    return AnalysisResult(
        prompt_sent="Analyze this dream...",
        raw_model_response='{"summary": "A dream about falling into calm water."}',
        insights=sample_insights(),
        model_used=model,
        fallback_used=fallback_used,
    )
