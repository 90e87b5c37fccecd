"""Pydantic schemas for API validation and serialization."""

from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.evaluation import (
    AuthorityCount,
    EvaluateResponse,
    EvaluationStats,
    JurisdictionCount,
    StatsResponse,
)
from regmatch.models.schemas.rule import (
    CatalogIngestResponse,
    CatalogItem,
    Conditions,
    CustomPredicate,
    FieldPredicate,
    Geography,
    IndustryScope,
    RuleDefinition,
    RuleListResponse,
    RuleResponse,
    RuleScope,
    RuleSummary,
)

__all__ = [
    "AuthorityCount",
    "BusinessInput",
    "CatalogIngestResponse",
    "CatalogItem",
    "Conditions",
    "CustomPredicate",
    "EvaluateResponse",
    "EvaluationStats",
    "FieldPredicate",
    "Geography",
    "IndustryScope",
    "JurisdictionCount",
    "RuleDefinition",
    "RuleListResponse",
    "RuleResponse",
    "RuleScope",
    "RuleSummary",
    "StatsResponse",
]
