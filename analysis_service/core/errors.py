class AnalysisError(Exception):
    """Base class for classified analysis failures."""
    kind = "internal"

    def __init__(self, message: str = "Failed to analyze dream"):
        super().__init__(message)
        self.message = message


class ServiceNotConfigured(AnalysisError):
    kind = "service-not-configured"

    def __init__(self, message: str = "Analysis service not configured"):
        super().__init__(message)


class ModelUnavailable(AnalysisError):
    kind = "model-unavailable"

    def __init__(self, message: str = "Failed to analyze dream - all models unavailable"):
        super().__init__(message)


class AnalysisParseError(AnalysisError):
    kind = "analysis-parse-error"

    def __init__(self, message: str = "Failed to parse analysis response"):
        super().__init__(message)
