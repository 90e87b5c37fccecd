"""Pydantic schemas for evaluation results and catalog statistics."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.rule import RuleSummary


class EvaluationStats(BaseModel):
    """Size of the candidate pool and of the matched subset."""

    pool_count: int = Field(..., alias="poolCount")
    matched_count: int = Field(..., alias="matchedCount")

    model_config = ConfigDict(populate_by_name=True)


class EvaluateResponse(BaseModel):
    """Rules that apply to a business, with non-blocking input warnings."""

    input: BusinessInput
    matched: List[RuleSummary]
    stats: EvaluationStats
    warnings: List[str] = Field(default_factory=list)


class JurisdictionCount(BaseModel):
    """Number of stored rules for one jurisdiction."""

    jurisdiction: str
    count: int


class AuthorityCount(BaseModel):
    """Number of stored rules issued by one authority."""

    authority: str
    count: int


class StatsResponse(BaseModel):
    """Aggregate statistics over the rule catalog."""

    by_jurisdiction: List[JurisdictionCount] = Field(..., alias="byJurisdiction")
    by_authority: List[AuthorityCount] = Field(..., alias="byAuthority")

    model_config = ConfigDict(populate_by_name=True)
