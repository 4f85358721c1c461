from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import requests

from journal.analysis_client import AnalysisServiceClient
from journal.exceptions import Internal, ModelUnavailable, ServiceNotConfigured
from tests.helpers import make_response, sample_result

DREAM = SimpleNamespace(
    title="Falling",
    body="I was falling from a bridge into water",
    date=datetime(2026, 10, 1, 7, 30, tzinfo=timezone.utc),
)


def make_client(session):
    return AnalysisServiceClient("http://analysis.test/", timeout=12, session=session)


def test_successful_analysis():
    session = Mock()
    session.post.return_value = make_response(200, sample_result().model_dump(by_alias=True))

    result = make_client(session).analyze(DREAM)

    assert result.model_used == "gemini-1.5-flash-latest"
    assert result.insights.summary.startswith("A dream about falling")
    session.post.assert_called_once_with(
        "http://analysis.test/analyze",
        json={"title": "Falling", "body": "I was falling from a bridge into water", "date": "2026-10-01"},
        timeout=12,
    )


@pytest.mark.parametrize("status_code, kind, error_class", [
    (502, "model-unavailable", ModelUnavailable),
    (503, "service-not-configured", ServiceNotConfigured),
])
def test_classified_service_errors_are_mapped(status_code, kind, error_class):
    session = Mock()
    session.post.return_value = make_response(status_code, {"detail": {"kind": kind, "message": "from service"}})

    with pytest.raises(error_class) as exc_info:
        make_client(session).analyze(DREAM)

    assert exc_info.value.message == "from service"


def test_service_internal_error_is_internal():
    session = Mock()
    session.post.return_value = make_response(500, {"detail": {"kind": "internal", "message": "stack trace"}})

    with pytest.raises(Internal) as exc_info:
        make_client(session).analyze(DREAM)

    assert exc_info.value.message == "Failed to analyze dream"


def test_non_json_error_body_is_internal():
    session = Mock()
    session.post.return_value = make_response(502, ValueError("not json"))

    with pytest.raises(Internal):
        make_client(session).analyze(DREAM)


def test_connection_failure_is_internal():
    session = Mock()
    session.post.side_effect = requests.ConnectionError("refused")

    with pytest.raises(Internal):
        make_client(session).analyze(DREAM)


def test_malformed_success_body_is_internal():
    session = Mock()
    session.post.return_value = make_response(200, {"insights": "nope"})

    with pytest.raises(Internal):
        make_client(session).analyze(DREAM)
