"""Pydantic schemas for rule definitions and rule records."""

from datetime import datetime
from typing import Any, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from regmatch.core.enums import ConditionMode, Jurisdiction


class _CamelModel(BaseModel):
    """Base for catalog shapes that use camelCase keys on the wire."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# ==================== Predicate Schemas ====================


class CustomPredicate(_CamelModel):
    """Named composite check, e.g. ``{"custom": "hasEmployees"}``."""

    custom: str


class FieldPredicate(_CamelModel):
    """Field comparison, e.g. ``{"field": "revenueUSD", "op": "gte", "value": 25000000}``."""

    field: str
    op: str
    value: Any = None


Predicate = Union[CustomPredicate, FieldPredicate]


class Conditions(_CamelModel):
    """Predicates plus the mode used to combine them."""

    mode: ConditionMode
    predicates: List[Predicate] = Field(default_factory=list)


# ==================== Scope Schemas ====================


class Geography(_CamelModel):
    """Geographic scope of a rule. ``counties`` is carried but not matched."""

    country: Optional[str] = None
    states: Optional[List[str]] = None
    counties: Optional[List[str]] = None
    cities: Optional[List[str]] = None

    @field_validator("country")
    @classmethod
    def validate_country(cls, v: Optional[str]) -> Optional[str]:
        """Ensure country code is uppercase if provided."""
        return v.upper() if v else v

    @field_validator("states")
    @classmethod
    def validate_states(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Ensure state codes are uppercase."""
        return [state.upper() for state in v] if v else v


class IndustryScope(_CamelModel):
    """NAICS prefix an industry-scoped rule applies to."""

    naics_prefix: str = Field(..., alias="naicsPrefix")
    label: Optional[str] = None


class RuleScope(_CamelModel):
    """Who a rule applies to. All present gates must pass."""

    geography: Optional[Geography] = None
    industries: Optional[List[IndustryScope]] = None
    min_employees: Optional[int] = Field(None, alias="minEmployees")


class RuleDefinition(_CamelModel):
    """The part of a rule the applicability engine reads."""

    title: Optional[str] = None
    jurisdiction: Jurisdiction
    scope: Optional[RuleScope] = None
    conditions: Conditions


# ==================== Rule Record Schemas ====================


class Requirement(BaseModel):
    """A single action a business must take to comply."""

    action: str = Field(..., min_length=1)
    details: Optional[str] = None


class Reference(BaseModel):
    """Link to the authoritative source of a rule."""

    label: str
    url: str


class RuleSummary(BaseModel):
    """Rule as returned to clients."""

    id: UUID
    title: str
    description: Optional[str] = None
    jurisdiction: Jurisdiction
    authority: str
    requirements: List[Requirement] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class RuleResponse(RuleSummary):
    """Full rule record including its applicability definition."""

    scope: Optional[dict[str, Any]] = None
    conditions: dict[str, Any]
    penalties: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RuleListResponse(BaseModel):
    """Paginated rule listing."""

    count: int
    rules: List[RuleResponse]


# ==================== Catalog Schemas ====================


class CatalogItem(BaseModel):
    """One entry of a rule catalog file."""

    title: str = Field(..., min_length=1)
    url: str
    source: str
    jurisdiction: Jurisdiction
    authority: str = Field(..., min_length=1)
    description: Optional[str] = None
    penalties: Optional[str] = None
    scope: Optional[RuleScope] = None
    conditions: Conditions
    requirements: List[Requirement]
    tags: List[str] = Field(default_factory=list)

    def to_definition(self) -> RuleDefinition:
        """Project the catalog item onto the fields the engine reads."""
        return RuleDefinition(
            title=self.title,
            jurisdiction=self.jurisdiction,
            scope=self.scope,
            conditions=self.conditions,
        )


class CatalogIngestResponse(BaseModel):
    """Outcome of loading a catalog into the rule store."""

    created: int
    skipped: int
    warnings: List[str] = Field(default_factory=list)
