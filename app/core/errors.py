class AnalysisError(Exception):
    """Base class for failures on the analysis path."""

    status_code = 500


class MissingFieldsError(AnalysisError):
    status_code = 400

    def __init__(self, message: str = "Missing required fields: notes, petInfo"):
        super().__init__(message)


class MalformedRequest(AnalysisError):
    status_code = 400


class UpstreamError(AnalysisError):
    """
    Gemini could not be reached or answered with a non-success status.
    `upstream_status` is None for transport failures (timeouts, refused
    connections) and for a missing API key.
    """

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class InvalidUpstreamResponse(AnalysisError):
    def __init__(self, message: str = "Invalid response from Gemini API"):
        super().__init__(message)
