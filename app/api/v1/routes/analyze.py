import logging

import pydantic
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from app.api.v1.gemini_client import GeminiClient, get_generative_client
from app.api.v1.profiles import get_profile
from app.api.v1.prompt_builder import build_prompt
from app.api.v1.response_formatter import (
    format_analysis_response,
    format_error_response,
    utc_timestamp,
)
from app.core.config import Settings, get_settings
from app.core.errors import MalformedRequest, MissingFieldsError
from app.schemas.analysis import AnalysisRequest, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()

HANDLED_METHODS = ["GET", "POST", "OPTIONS", "PUT", "PATCH", "DELETE", "HEAD"]


def _is_blank(value) -> bool:
    # JSON falsy scalars; an empty object still counts as present
    return value is None or value is False or value == "" or value == 0


async def _parse_analysis_request(request: Request) -> AnalysisRequest:
    try:
        body = await request.json()
    except ValueError as e:
        raise MalformedRequest(f"Request body is not valid JSON: {e}") from e

    if not isinstance(body, dict):
        raise MalformedRequest("Request body must be a JSON object")

    notes = body.get("notes")
    pet_info = body.get("petInfo")
    if _is_blank(notes) or _is_blank(pet_info):
        raise MissingFieldsError()
    if not isinstance(pet_info, dict):
        raise MalformedRequest("petInfo must be a JSON object")

    try:
        return AnalysisRequest.model_validate({
            "notes": str(notes),
            "petInfo": pet_info,
            "action": body.get("action"),
        })
    except pydantic.ValidationError as e:
        raise MalformedRequest(f"Invalid request fields: {e.errors()[0]['msg']}") from e


async def analyze_case_notes(request: Request, settings: Settings, client: GeminiClient) -> Response:
    try:
        req = await _parse_analysis_request(request)
    except MissingFieldsError as e:
        return JSONResponse({"error": str(e)}, status_code=e.status_code)
    except MalformedRequest as e:
        logger.warning("Rejected malformed analysis request: %s", e)
        status, body = format_error_response(e)
        return JSONResponse(body, status_code=status)

    try:
        profile = get_profile(settings.analysis_profile)
        prompt = build_prompt(req.notes, req.petInfo, profile)
        analysis = await run_in_threadpool(client.generate, prompt, profile)
    except Exception as e:
        logger.exception("AI Analysis Error: %s", e)
        status, body = format_error_response(e)
        return JSONResponse(body, status_code=status)

    logger.info(
        "AI Analysis completed for pet: %s (%s) [profile=%s]",
        req.petInfo.name, req.petInfo.species, profile.name,
    )
    return JSONResponse(
        format_analysis_response(analysis, req.petInfo.name, req.action or profile.default_action)
    )


def health(settings: Settings) -> Response:
    body = HealthResponse(
        message="VetKlinik AI API çalışıyor! 🐾",
        status="OK",
        timestamp=utc_timestamp(),
        version=settings.app_version,
        environment=settings.app_env,
    )
    return JSONResponse(body.model_dump())


# -------------------------------
# Single entry point, any path
# -------------------------------
@router.api_route("/{full_path:path}", methods=HANDLED_METHODS, include_in_schema=False)
async def handle(
    request: Request,
    full_path: str,
    settings: Settings = Depends(get_settings),
    client: GeminiClient = Depends(get_generative_client),
):
    if request.method == "OPTIONS":
        return Response(status_code=200)
    if request.method == "GET":
        return health(settings)
    if request.method == "POST":
        return await analyze_case_notes(request, settings, client)
    return PlainTextResponse("Method not allowed", status_code=405)
