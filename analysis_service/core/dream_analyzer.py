import logging
from typing import Optional

from analysis_service.config import Settings
from analysis_service.core.errors import AnalysisParseError
from analysis_service.core.fallback import generate_fallback_insights
from analysis_service.core.insights import AnalysisResult, DreamInput
from analysis_service.core.model_invoker import ModelInvoker
from analysis_service.core.prompt_builder import build_prompt
from analysis_service.core.response_parser import parse_insights

logger = logging.getLogger(__name__)

OFFLINE_MODEL = "rule-based"


class DreamAnalyzer:
    """
    Runs one dream through prompt -> model -> parser.

    A reply that can't be parsed is replaced by the rule-based interpretation
    instead of failing the request. With no invoker the analyzer works
    offline and only uses the rule-based generator.
    """

    def __init__(self, invoker: Optional[ModelInvoker]):
        self.invoker = invoker

    @property
    def offline(self) -> bool:
        return self.invoker is None

    def analyze(self, dream: DreamInput) -> AnalysisResult:
        prompt = build_prompt(dream)

        if self.offline:
            return AnalysisResult(
                prompt_sent=prompt,
                raw_model_response="",
                insights=generate_fallback_insights(dream.title, dream.body),
                model_used=OFFLINE_MODEL,
                fallback_used=True,
            )

        reply = self.invoker.invoke(prompt)

        try:
            insights = parse_insights(reply.text)
            fallback_used = False
        except AnalysisParseError as e:
            logger.warning("Failed to parse %s response, using rule-based analysis: %s", reply.model, e)
            logger.debug("Raw response: %s", reply.text)
            insights = generate_fallback_insights(dream.title, dream.body)
            fallback_used = True

        return AnalysisResult(
            prompt_sent=prompt,
            raw_model_response=reply.text,
            insights=insights,
            model_used=reply.model,
            fallback_used=fallback_used,
        )


def build_analyzer(settings: Settings) -> DreamAnalyzer:
    if settings.ANALYSIS_ENGINE == "offline":
        logger.info("Analysis engine running offline (rule-based only)")
        return DreamAnalyzer(invoker=None)

    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; analysis requests will fail until it is configured")

    invoker = ModelInvoker(
        api_key=settings.GEMINI_API_KEY,
        models=settings.model_candidates,
        base_url=settings.GEMINI_API_BASE,
        timeout=settings.MODEL_TIMEOUT_SECONDS,
    )
    return DreamAnalyzer(invoker)
