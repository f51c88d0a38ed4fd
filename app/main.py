import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.core.cors import add_cors_headers
from app.api.v1.router import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Every GET is the liveness probe, so the generated docs are switched off
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(BaseHTTPMiddleware, dispatch=add_cors_headers)

app.include_router(api_router)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    # Methods outside the catch-all route's list (TRACE, PROPFIND, ...) land here
    if exc.status_code == 405:
        return PlainTextResponse("Method not allowed", status_code=405, headers=exc.headers)
    return await http_exception_handler(request, exc)
