"""Health check endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from regmatch.deps import DbSession
from regmatch.repositories.rule_repository import RuleRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: DbSession) -> dict:
    """
    Report API and rule store status.

    The rule count doubles as the database probe; an empty store is healthy
    but every evaluation will match nothing until a catalog is ingested.
    """
    rule_count: Optional[int] = None
    try:
        rule_count = await RuleRepository(db).count()
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Health check could not reach the rule store: {e}")
        db_status = f"unhealthy: {e}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "api": "healthy",
        "database": db_status,
        "rules": rule_count,
    }
