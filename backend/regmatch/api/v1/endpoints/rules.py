"""Rule catalog endpoints for browsing, statistics and ingest."""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from regmatch.core.enums import Jurisdiction
from regmatch.deps import DbSession
from regmatch.models.schemas.evaluation import StatsResponse
from regmatch.models.schemas.rule import (
    CatalogIngestResponse,
    CatalogItem,
    RuleListResponse,
)
from regmatch.services.rule_engine import RuleConfigurationError
from regmatch.services.rule_service import RuleService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=RuleListResponse,
    summary="Browse rules",
)
async def list_rules(
    db: DbSession,
    jurisdiction: Optional[Jurisdiction] = None,
    authority: Optional[str] = None,
    q: Optional[str] = None,
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
) -> RuleListResponse:
    """
    List rules with optional filters.

    - **jurisdiction**: federal, state or local
    - **authority**: case-insensitive substring of the issuing authority
    - **q**: case-insensitive substring of the title
    - **limit**: page size, capped server-side
    """
    service = RuleService(db)
    return await service.list_rules(
        jurisdiction=jurisdiction,
        authority=authority,
        q=q,
        limit=limit,
        offset=offset,
    )


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Rule catalog statistics",
)
async def get_rule_stats(
    db: DbSession,
) -> StatsResponse:
    """Count rules by jurisdiction and by the fifteen largest authorities."""
    service = RuleService(db)
    return await service.get_stats()


@router.post(
    "/catalog",
    response_model=CatalogIngestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Ingest a rule catalog",
)
async def ingest_catalog(
    items: List[CatalogItem],
    db: DbSession,
) -> CatalogIngestResponse:
    """
    Load catalog entries into the rule store.

    Entries already present (same title and authority) are skipped.
    A catalog referencing an unknown custom predicate is rejected as a whole.
    """
    try:
        service = RuleService(db)
        return await service.ingest_catalog(items)
    except RuleConfigurationError as e:
        logger.warning(f"Rejected rule catalog: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
