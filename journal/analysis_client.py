import logging
from typing import Optional

import requests
from django.utils import timezone
from pydantic import ValidationError

from analysis_service.core.insights import AnalysisResult
from .exceptions import ERRORS_BY_KIND, Internal

logger = logging.getLogger(__name__)


class AnalysisServiceClient:
    """HTTP client for the FastAPI analysis service."""

    def __init__(self, base_url: str, timeout: float = 90, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def analyze(self, dream) -> AnalysisResult:
        payload = {
            "title": dream.title,
            "body": dream.body,
            "date": timezone.localtime(dream.date).date().isoformat() if dream.date else None,
        }

        try:
            response = self.session.post(f"{self.base_url}/analyze", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Failed to connect to analysis service: %s", e)
            raise Internal()

        if response.status_code != 200:
            raise self.error_from_response(response)

        try:
            return AnalysisResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Malformed reply from analysis service: %s", e)
            raise Internal()

    def error_from_response(self, response: requests.Response):
        try:
            detail = response.json().get("detail") or {}
        except ValueError:
            detail = {}

        if not isinstance(detail, dict):
            detail = {}

        error_class = ERRORS_BY_KIND.get(detail.get("kind"), Internal)
        logger.warning("Analysis service returned %s (%s)", response.status_code, detail.get("kind", "unknown"))
        if error_class is Internal:
            return Internal()
        return error_class(detail.get("message"))
