from datetime import datetime, timezone

from app.core.errors import AnalysisError, MalformedRequest, UpstreamError
from app.schemas.analysis import AnalysisResponse, ErrorResponse

GENERIC_FAILURE = "AI analizi sırasında hata oluştu"

UPSTREAM_STATUS_MESSAGES = {
    429: "Çok fazla istek gönderildi, lütfen bekleyin",
    403: "API erişim hatası",
    400: "İstek formatında hata",
}


def utc_timestamp() -> str:
    """ISO-8601 with millisecond precision and a Z suffix, e.g. 2024-05-01T09:30:00.123Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def user_facing_error(error: Exception) -> str:
    if isinstance(error, UpstreamError):
        return UPSTREAM_STATUS_MESSAGES.get(error.upstream_status, GENERIC_FAILURE)
    if isinstance(error, MalformedRequest):
        return UPSTREAM_STATUS_MESSAGES[400]
    return GENERIC_FAILURE


def format_error_response(error: Exception) -> tuple[int, dict]:
    status = error.status_code if isinstance(error, AnalysisError) else 500
    body = ErrorResponse(error=user_facing_error(error), details=str(error))
    return status, body.model_dump()


def format_analysis_response(analysis: str, pet_name, action) -> dict:
    # petName is left out, not null, when the caller sent no name
    return AnalysisResponse(
        analysis=analysis,
        timestamp=utc_timestamp(),
        petName=pet_name,
        action=action,
    ).model_dump(exclude_none=True)
