from rest_framework import status
from rest_framework.exceptions import APIException


class AnalysisError(APIException):
    """
    A classified analysis failure. `kind` is the stable error code the
    client sees alongside the message.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to analyze dream"
    default_code = "internal"
    kind = "internal"

    @property
    def message(self) -> str:
        return str(self.detail)

    def as_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class Unauthenticated(AnalysisError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "User must be authenticated"
    default_code = kind = "unauthenticated"


class InvalidArgument(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "dreamId and uid are required"
    default_code = kind = "invalid-argument"


class PermissionDenied(AnalysisError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "User can only analyze their own dreams"
    default_code = kind = "permission-denied"


class NotFound(AnalysisError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Dream not found"
    default_code = kind = "not-found"


class AlreadyExists(AnalysisError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Dream already has analysis"
    default_code = kind = "already-exists"


class ServiceNotConfigured(AnalysisError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Analysis service not configured"
    default_code = kind = "service-not-configured"


class ModelUnavailable(AnalysisError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Failed to analyze dream - all models unavailable"
    default_code = kind = "model-unavailable"


class AnalysisParseError(AnalysisError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Failed to parse analysis response"
    default_code = kind = "analysis-parse-error"


class Internal(AnalysisError):
    pass


ERRORS_BY_KIND = {
    cls.kind: cls
    for cls in (
        Unauthenticated, InvalidArgument, PermissionDenied, NotFound, AlreadyExists,
        ServiceNotConfigured, ModelUnavailable, AnalysisParseError, Internal,
    )
}
