"""Service layer for business logic."""

from regmatch.services.evaluation_service import EvaluationService
from regmatch.services.rule_service import RuleService

__all__ = ["EvaluationService", "RuleService"]
