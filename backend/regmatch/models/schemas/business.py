"""Pydantic schema for the business profile evaluated against rules."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class BusinessInput(BaseModel):
    """
    Business profile submitted for rule evaluation.

    This is the request boundary: anything that reaches the rule engine has
    passed through this schema, so ``state`` is always present. Every other
    attribute may be absent; booleans default to False.

    Wire names are camelCase (``revenueUSD``, ``handlesPHI``) because field
    predicates in the rule catalog address attributes by those names.
    """

    state: str = Field(..., min_length=2, max_length=2, pattern="^[A-Za-z]{2}$")
    city: Optional[str] = Field(None, max_length=100)
    zip: Optional[str] = Field(None, max_length=10)
    naics: Optional[str] = Field(None, max_length=6)
    employees: Optional[int] = Field(None, ge=0)
    revenue_usd: Optional[int] = Field(None, ge=0, alias="revenueUSD")

    public_facing: bool = False
    has_employees: bool = False
    handles_phi: bool = Field(False, alias="handlesPHI")
    serves_alcohol: bool = False
    handles_food: bool = False
    collects_pii: bool = Field(False, alias="collectsPII")
    ecommerce: bool = False

    # Referenced by some catalog rules but not required by the form
    outdoor_work: bool = False
    exposure_blood: bool = False

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: str) -> str:
        """Ensure state is uppercase."""
        return v.upper()

    @field_validator("city", "zip", "naics", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Strip form fields before length checks; blank means not provided."""
        if isinstance(v, str):
            return v.strip() or None
        return v
