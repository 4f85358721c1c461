from unittest.mock import Mock

import pytest
import requests

from analysis_service.core.dream_analyzer import DreamAnalyzer
from analysis_service.core.errors import ModelUnavailable, ServiceNotConfigured
from analysis_service.core.insights import DreamInput
from analysis_service.core.model_invoker import ModelInvoker
from tests.helpers import gemini_payload, make_response

MODELS = ["model-cheap", "model-mid", "model-premium"]


def make_invoker(session, api_key="test-key", models=MODELS):
    return ModelInvoker(
        api_key=api_key,
        models=models,
        base_url="https://example.test/v1beta/",
        timeout=5,
        session=session,
    )


def test_missing_credential_fails_before_any_request():
    session = Mock()

    with pytest.raises(ServiceNotConfigured):
        make_invoker(session, api_key=None).invoke("prompt")

    session.post.assert_not_called()


def test_falls_through_to_third_model():
    session = Mock()
    session.post.side_effect = [
        make_response(500),
        make_response(429),
        make_response(200, gemini_payload("third reply")),
    ]

    result = make_invoker(session).invoke("prompt")

    assert result.text == "third reply"
    assert result.model == "model-premium"
    assert session.post.call_count == 3


def test_network_errors_and_timeouts_advance_to_next_model():
    session = Mock()
    session.post.side_effect = [
        requests.ConnectionError("boom"),
        requests.Timeout("slow"),
        make_response(200, gemini_payload("ok")),
    ]

    result = make_invoker(session).invoke("prompt")

    assert result.model == "model-premium"


def test_all_models_failing_raises_model_unavailable():
    session = Mock()
    session.post.side_effect = [make_response(500), make_response(503), make_response(404)]

    with pytest.raises(ModelUnavailable):
        make_invoker(session).invoke("prompt")

    assert session.post.call_count == 3
    called_urls = [call.args[0] for call in session.post.call_args_list]
    assert called_urls == [
        "https://example.test/v1beta/models/model-cheap:generateContent",
        "https://example.test/v1beta/models/model-mid:generateContent",
        "https://example.test/v1beta/models/model-premium:generateContent",
    ]


def test_stops_at_first_success():
    session = Mock()
    session.post.side_effect = [make_response(200, gemini_payload("first"))]

    result = make_invoker(session).invoke("prompt")

    assert result.model == "model-cheap"
    assert session.post.call_count == 1


def test_request_shape():
    session = Mock()
    session.post.return_value = make_response(200, gemini_payload("hi"))

    make_invoker(session).invoke("interpret this")

    kwargs = session.post.call_args.kwargs
    assert kwargs["json"] == {"contents": [{"parts": [{"text": "interpret this"}]}]}
    assert kwargs["params"] == {"key": "test-key"}
    assert kwargs["timeout"] == 5


def test_unexpected_body_shape_returns_empty_text():
    session = Mock()
    session.post.return_value = make_response(200, {"candidates": []})

    result = make_invoker(session).invoke("prompt")

    assert result.text == ""
    assert result.model == "model-cheap"


@pytest.mark.parametrize("text", [None, 42, ["a"]])
def test_non_string_text_returns_empty_text(text):
    session = Mock()
    session.post.return_value = make_response(200, {"candidates": [{"content": {"parts": [{"text": text}]}}]})

    result = make_invoker(session).invoke("prompt")

    assert result.text == ""


def test_null_text_reply_falls_back_to_rule_based_analysis():
    session = Mock()
    session.post.return_value = make_response(200, {"candidates": [{"content": {"parts": [{"text": None}]}}]})

    result = DreamAnalyzer(make_invoker(session)).analyze(DreamInput(title="Falling", body="falling into water"))

    assert result.fallback_used is True
    assert result.raw_model_response == ""
    assert len(result.insights.themes) >= 3


def test_empty_candidate_list_is_unavailable():
    with pytest.raises(ModelUnavailable):
        make_invoker(Mock(), models=[]).invoke("prompt")
