"""Dream analysis error taxonomy"""


class DreamAnalysisError(Exception):
    """Base error. `message` is safe to show to the caller."""

    status_code = 500
    default_message = "Internal server error during dream analysis"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DreamAnalysisError):
    """Malformed caller input"""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"Validation failed: {field}: {constraint}")


class RateLimitError(DreamAnalysisError):
    status_code = 429
    default_message = "Too many dream analysis requests. Please try again in 15 minutes."


class UpstreamFormatError(DreamAnalysisError):
    """The model returned unparseable or schema-violating content"""

    status_code = 500
    default_message = "Invalid dream analysis response format"


class UpstreamQuotaError(DreamAnalysisError):
    """The model provider reports its own quota or rate limit exhausted"""

    status_code = 429
    default_message = "API quota exceeded. Please try again later."


class UpstreamTimeoutError(DreamAnalysisError):
    status_code = 504
    default_message = "Dream analysis timed out. Please try again."


class NotFoundError(DreamAnalysisError):
    """Unknown route"""

    status_code = 404
    default_message = "Endpoint not found"


class InternalError(DreamAnalysisError):
    status_code = 500
    default_message = "Internal server error during dream analysis"
