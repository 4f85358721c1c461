"""
Dream analysis orchestration.

Validates the caller, sends the dream to the analysis service and stores the
result. The analysis row, the dream link and the stats increment are written
in one transaction, and the link only succeeds while the dream is still
unanalyzed, so a dream ends up with at most one analysis even when two
requests race.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F

from .exceptions import (
    AlreadyExists, AnalysisError, Internal, InvalidArgument, NotFound,
    PermissionDenied, Unauthenticated,
)
from .models import Analysis, Dream, User

logger = logging.getLogger(__name__)


class AnalysisOrchestrator:
    def __init__(self, client):
        self.client = client

    def analyze(self, caller, dream_id, uid) -> dict:
        try:
            return self._analyze(caller, dream_id, uid)
        except AnalysisError:
            raise
        except Exception:
            logger.exception("Error in analyze dream pipeline")
            raise Internal()

    def _analyze(self, caller, dream_id, uid) -> dict:
        if caller is None or not caller.is_authenticated:
            raise Unauthenticated()

        if not dream_id or not uid:
            raise InvalidArgument()

        if str(caller.pk) != str(uid):
            raise PermissionDenied()

        dream = self.get_dream(caller, dream_id)
        if dream.analysis_id:
            raise AlreadyExists()

        result = self.client.analyze(dream)

        with transaction.atomic():
            analysis = Analysis.objects.create(
                user=caller,
                dream=dream,
                prompt_sent=result.prompt_sent,
                raw_model_response=result.raw_model_response,
                insights=result.insights.to_dict(),
                model_version=result.model_used,
                fallback_used=result.fallback_used,
            )

            linked = Dream.objects.filter(pk=dream.pk, analysis__isnull=True).update(analysis=analysis)
            if not linked:
                # Another request linked an analysis since the check above
                raise AlreadyExists()

            User.objects.filter(pk=caller.pk).update(analyses_used=F("analyses_used") + 1)

        logger.info("Dream %s analyzed with %s", dream.pk, result.model_used)
        return {
            "analysisId": str(analysis.pk),
            "insights": analysis.insights,
            "modelUsed": result.model_used,
        }

    def get_dream(self, caller, dream_id) -> Dream:
        try:
            return Dream.objects.get(pk=dream_id, user=caller)
        except (Dream.DoesNotExist, ValidationError):
            raise NotFound()
