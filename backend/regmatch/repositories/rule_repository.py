"""Repository for rule data access used by evaluation and browsing."""

from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from regmatch.core.enums import Jurisdiction
from regmatch.models.domain.rule import Rule
from regmatch.repositories.base import BaseRepository


class RuleRepository(BaseRepository[Rule]):
    """
    Repository for Rule with catalog-level queries.

    The candidate pool is wide: the applicability engine
    re-checks every scope field, so any pre-filtering here only trims work.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the rule repository.

        Args:
            db: Async database session
        """
        super().__init__(Rule, db)

    async def get_candidate_pool(self, limit: int = 5000) -> List[Rule]:
        """
        Retrieve the pool of rules to evaluate a business against.

        Args:
            limit: Maximum number of rules in the pool

        Returns:
            Rules ordered by creation time
        """
        stmt = select(Rule).order_by(Rule.created_at, Rule.title).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def search(
        self,
        jurisdiction: Optional[Jurisdiction] = None,
        authority: Optional[str] = None,
        q: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[int, List[Rule]]:
        """
        Search rules with simple filters and pagination.

        Args:
            jurisdiction: Exact jurisdiction filter
            authority: Case-insensitive substring of the issuing authority
            q: Case-insensitive substring of the title
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return

        Returns:
            Tuple of (total matching count, page of rules newest first)
        """
        conditions = []
        if jurisdiction is not None:
            conditions.append(Rule.jurisdiction == jurisdiction)
        if authority:
            conditions.append(Rule.authority.ilike(f"%{authority}%"))
        if q:
            conditions.append(Rule.title.ilike(f"%{q}%"))

        count_stmt = select(func.count()).select_from(Rule).where(*conditions)
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            select(Rule)
            .where(*conditions)
            .order_by(Rule.created_at.desc(), Rule.title)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return total, list(result.scalars().all())

    async def count_by_jurisdiction(self) -> List[Tuple[Jurisdiction, int]]:
        """Count rules per jurisdiction."""
        stmt = (
            select(Rule.jurisdiction, func.count(Rule.id))
            .group_by(Rule.jurisdiction)
            .order_by(Rule.jurisdiction)
        )
        result = await self.db.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def count_by_authority(self, limit: int = 15) -> List[Tuple[str, int]]:
        """Count rules per authority, most prolific first."""
        total = func.count(Rule.id).label("total")
        stmt = (
            select(Rule.authority, total)
            .group_by(Rule.authority)
            .order_by(total.desc(), Rule.authority)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def get_by_title_and_authority(
        self, title: str, authority: str
    ) -> Optional[Rule]:
        """
        Retrieve a rule by its natural key.

        Args:
            title: Rule title
            authority: Issuing authority

        Returns:
            The rule if found, None otherwise
        """
        return await self.find_one_by(title=title, authority=authority)
