"""Rule service for browsing, statistics and catalog ingest."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Set, Tuple

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from regmatch.config import settings
from regmatch.core.enums import Jurisdiction
from regmatch.models.schemas.evaluation import (
    AuthorityCount,
    JurisdictionCount,
    StatsResponse,
)
from regmatch.models.schemas.rule import (
    CatalogIngestResponse,
    CatalogItem,
    RuleListResponse,
    RuleResponse,
)
from regmatch.repositories.rule_repository import RuleRepository
from regmatch.services.rule_engine import ApplicabilityEngine, RuleConfigurationError

logger = logging.getLogger(__name__)

catalog_adapter = TypeAdapter(List[CatalogItem])


def load_catalog(path: Path) -> List[CatalogItem]:
    """
    Read and validate a JSON catalog file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If an entry does not match the catalog shape
    """
    with path.open(encoding="utf-8") as f:
        return catalog_adapter.validate_python(json.load(f))


class RuleService:
    """
    Rule service for managing the rule catalog.

    Provides paginated browsing, aggregate statistics and idempotent
    catalog ingest with static validation of rule definitions.
    """

    def __init__(self, db: AsyncSession, engine: Optional[ApplicabilityEngine] = None):
        """
        Initialize the rule service.

        Args:
            db: Async database session
            engine: Applicability engine used for static validation
        """
        self.db = db
        self.repo = RuleRepository(db)
        self.engine = engine or ApplicabilityEngine()

    async def list_rules(
        self,
        jurisdiction: Optional[Jurisdiction] = None,
        authority: Optional[str] = None,
        q: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> RuleListResponse:
        """
        Browse rules with simple filters and pagination.

        Args:
            jurisdiction: Exact jurisdiction filter
            authority: Case-insensitive authority substring
            q: Case-insensitive title substring
            limit: Page size (capped at RULES_PAGE_MAX)
            offset: Number of rules to skip

        Returns:
            RuleListResponse with total count and the page of rules
        """
        limit = min(limit, settings.RULES_PAGE_MAX)
        count, rules = await self.repo.search(
            jurisdiction=jurisdiction,
            authority=authority,
            q=q,
            skip=offset,
            limit=limit,
        )
        return RuleListResponse(
            count=count,
            rules=[RuleResponse.model_validate(rule) for rule in rules],
        )

    async def get_stats(self) -> StatsResponse:
        """Aggregate rule counts by jurisdiction and by top authorities."""
        by_jurisdiction = await self.repo.count_by_jurisdiction()
        by_authority = await self.repo.count_by_authority(limit=15)
        return StatsResponse(
            by_jurisdiction=[
                JurisdictionCount(jurisdiction=jurisdiction.value, count=count)
                for jurisdiction, count in by_jurisdiction
            ],
            by_authority=[
                AuthorityCount(authority=authority, count=count)
                for authority, count in by_authority
            ],
        )

    async def ingest_catalog(self, items: List[CatalogItem]) -> CatalogIngestResponse:
        """
        Load catalog items into the rule store.

        Items whose (title, authority) already exist are skipped. Every new
        item is statically validated first; an unknown custom predicate makes
        the rule impossible to evaluate, so the whole catalog is rejected
        before anything is written. Other findings are logged and returned
        as warnings.

        Args:
            items: Parsed catalog entries

        Returns:
            CatalogIngestResponse with created/skipped counts and warnings

        Raises:
            RuleConfigurationError: If any new item references an unknown custom predicate
        """
        pending: List[CatalogItem] = []
        warnings: List[str] = []
        seen: Set[Tuple[str, str]] = set()
        skipped = 0

        for item in items:
            natural_key = (item.title, item.authority)
            existing = await self.repo.get_by_title_and_authority(item.title, item.authority)
            if existing or natural_key in seen:
                skipped += 1
                continue
            seen.add(natural_key)

            problems = self.engine.validate_rule(item.to_definition())
            fatal = [str(p) for p in problems if p.fatal]
            if fatal:
                raise RuleConfigurationError("; ".join(fatal), rule_title=item.title)
            for problem in problems:
                message = f"{item.title}: {problem}"
                logger.warning(f"Catalog rule evaluates to a silent non-match: {message}")
                warnings.append(message)

            pending.append(item)

        await self.repo.create_many(
            dict(
                title=item.title,
                description=item.description,
                jurisdiction=item.jurisdiction,
                authority=item.authority,
                scope=(
                    item.scope.model_dump(mode="json", by_alias=True, exclude_none=True)
                    if item.scope
                    else None
                ),
                conditions=item.conditions.model_dump(mode="json", by_alias=True),
                requirements=[r.model_dump(exclude_none=True) for r in item.requirements],
                penalties=item.penalties,
                references=[{"label": item.title, "url": item.url}],
                tags=item.tags,
            )
            for item in pending
        )

        logger.info(f"Catalog ingest complete. created={len(pending)}, skipped={skipped}")
        return CatalogIngestResponse(created=len(pending), skipped=skipped, warnings=warnings)
