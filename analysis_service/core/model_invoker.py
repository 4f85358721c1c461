import logging
from dataclasses import dataclass
from typing import List, Optional

import requests

from analysis_service.core.errors import ModelUnavailable, ServiceNotConfigured

logger = logging.getLogger(__name__)


@dataclass
class ModelResult:
    text: str
    model: str


class ModelInvoker:
    """
    Sends a prompt to the generative-language API, trying each candidate
    model once in ranked order and returning the first successful reply.
    """

    def __init__(
        self,
        api_key: Optional[str],
        models: List[str],
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.models = list(models)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    def invoke(self, prompt: str) -> ModelResult:
        if not self.api_key:
            logger.error("GEMINI_API_KEY not found in environment variables")
            raise ServiceNotConfigured()

        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        for model in self.models:
            logger.info("Trying model: %s", model)
            try:
                response = self.session.post(
                    self.endpoint(model),
                    params={"key": self.api_key},
                    json=payload,
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                logger.warning("Model %s failed with error: %s", model, type(e).__name__)
                continue

            if not response.ok:
                logger.warning("Model %s failed with status: %s", model, response.status_code)
                continue

            logger.info("Successfully used model: %s", model)
            return ModelResult(text=extract_text(response), model=model)

        logger.error("All Gemini models failed (%d tried)", len(self.models))
        raise ModelUnavailable()


def extract_text(response: requests.Response) -> str:
    """First candidate's text, or an empty string when the body has another shape."""
    try:
        data = response.json()
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (ValueError, KeyError, IndexError, TypeError):
        logger.warning("Unexpected response shape from model provider")
        return ""

    if not isinstance(text, str):
        logger.warning("Model provider returned non-text content (%s)", type(text).__name__)
        return ""
    return text
