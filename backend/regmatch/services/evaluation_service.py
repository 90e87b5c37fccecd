"""Evaluation service for matching a business profile against the rule catalog."""

import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from regmatch.config import settings
from regmatch.models.domain.rule import Rule
from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.evaluation import EvaluateResponse, EvaluationStats
from regmatch.models.schemas.rule import RuleDefinition, RuleSummary
from regmatch.repositories.rule_repository import RuleRepository
from regmatch.services.rule_engine import ApplicabilityEngine, RuleConfigurationError

logger = logging.getLogger(__name__)


def to_definition(rule: Rule) -> RuleDefinition:
    """
    Validate a stored rule into the definition the engine reads.

    Raises:
        RuleConfigurationError: If the stored scope or conditions are malformed
    """
    try:
        return RuleDefinition.model_validate(
            {
                "title": rule.title,
                "jurisdiction": rule.jurisdiction,
                "scope": rule.scope,
                "conditions": rule.conditions,
            }
        )
    except ValidationError as e:
        raise RuleConfigurationError(
            f"Stored rule definition is malformed: {e.error_count()} validation error(s)",
            rule_title=rule.title,
        ) from e


def collect_warnings(business: BusinessInput) -> List[str]:
    """Collect non-blocking warnings for incomplete business profiles."""
    warnings: List[str] = []
    if not business.naics:
        warnings.append(
            "Industry-specific rules may be missing because NAICS was not provided."
        )
    if not business.city:
        warnings.append(
            "City-specific rules may be missing because City was not provided."
        )
    if not business.zip:
        warnings.append(
            "ZIP-based rules may be less precise because ZIP was not provided."
        )
    return warnings


class EvaluationService:
    """
    Evaluation service to orchestrate rule matching.

    This service:
    - Pulls a candidate pool from the rule store
    - Validates stored definitions and runs the applicability engine
    - Reports pool statistics and warnings for incomplete input
    """

    def __init__(
        self,
        db: AsyncSession,
        engine: Optional[ApplicabilityEngine] = None,
        pool_limit: Optional[int] = None,
    ):
        """
        Initialize the evaluation service.

        Args:
            db: Async database session
            engine: Applicability engine (defaults to a new instance)
            pool_limit: Candidate pool size (defaults to settings)
        """
        self.db = db
        self.rule_repo = RuleRepository(db)
        self.engine = engine or ApplicabilityEngine()
        self.pool_limit = pool_limit or settings.RULE_POOL_LIMIT

    async def evaluate(self, business: BusinessInput) -> EvaluateResponse:
        """
        Find the rules that apply to a business.

        Args:
            business: Validated business profile

        Returns:
            EvaluateResponse with matched rules, statistics and warnings

        Raises:
            RuleConfigurationError: If a stored rule cannot be evaluated
        """
        warnings = collect_warnings(business)

        pool = await self.rule_repo.get_candidate_pool(limit=self.pool_limit)
        try:
            definitions = {rule.id: to_definition(rule) for rule in pool}
            matched = self.engine.filter_applicable(
                pool, business, key=lambda rule: definitions[rule.id]
            )
        except RuleConfigurationError as e:
            logger.error(f"Rule catalog configuration error: {e}")
            raise

        logger.info(
            f"Evaluated business in {business.state}: "
            f"{len(matched)} of {len(pool)} rules apply"
        )

        return EvaluateResponse(
            input=business,
            matched=[RuleSummary.model_validate(rule) for rule in matched],
            stats=EvaluationStats(pool_count=len(pool), matched_count=len(matched)),
            warnings=warnings,
        )
