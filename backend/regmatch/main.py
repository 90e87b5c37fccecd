"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from regmatch.api.v1.router import api_router
from regmatch.config import settings
from regmatch.db.session import engine

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Starting rule matching API (environment={settings.ENVIRONMENT}, "
        f"pool limit={settings.RULE_POOL_LIMIT})"
    )
    yield
    await engine.dispose()


app = FastAPI(
    title="Regulatory Rule Matching API",
    description="API for finding the regulatory rules that apply to a business profile",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Evaluation and catalog routes live under /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict:
    """Service banner with links to the evaluation endpoint and docs."""
    return {
        "message": "Regulatory Rule Matching API",
        "version": "1.0.0",
        "evaluate": "/api/v1/evaluate",
        "docs": "/api/docs",
    }
