from fastapi import APIRouter
import app.api.v1.routes.analyze as analyze

api_router = APIRouter()

api_router.include_router(
    analyze.router,
    prefix="",
)
