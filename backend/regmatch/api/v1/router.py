"""API v1 router configuration."""

from fastapi import APIRouter

from regmatch.api.v1.endpoints import evaluate, health, rules

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health.router,
    tags=["health"],
)

api_router.include_router(
    evaluate.router,
    prefix="/evaluate",
    tags=["evaluate"],
)

api_router.include_router(
    rules.router,
    prefix="/rules",
    tags=["rules"],
)
