"""Scope gates: geography, industry and headcount.

Each gate returns None when it passes, or a failed ApplicabilityResult
explaining the mismatch. A missing scope section always passes.
"""

from typing import Optional

from regmatch.core.enums import Gate
from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.rule import RuleScope
from regmatch.services.rule_engine.base import ApplicabilityResult

SUPPORTED_COUNTRY = "US"


def check_geography(
    scope: Optional[RuleScope], business: BusinessInput
) -> Optional[ApplicabilityResult]:
    """
    Evaluate the geography gate.

    Args:
        scope: The rule's scope (may be None)
        business: The business profile

    Returns:
        None if the gate passes, otherwise the failed result
    """
    geography = scope.geography if scope else None
    if geography is None:
        return None

    if geography.country and geography.country != SUPPORTED_COUNTRY:
        return ApplicabilityResult(
            applies=False,
            failed_gate=Gate.GEOGRAPHY,
            reason=f"Rule applies in country '{geography.country}', only US rules are supported",
            evidence={"country": geography.country},
        )

    if geography.states and business.state not in geography.states:
        return ApplicabilityResult(
            applies=False,
            failed_gate=Gate.GEOGRAPHY,
            reason=f"Business state '{business.state}' is not in: {', '.join(geography.states)}",
            evidence={"actual": business.state, "states": list(geography.states)},
        )

    if geography.cities:
        # Case-insensitive; a profile without a city cannot satisfy a city list
        normalized_cities = [city.lower() for city in geography.cities]
        business_city = business.city.lower() if business.city else None
        if business_city not in normalized_cities:
            return ApplicabilityResult(
                applies=False,
                failed_gate=Gate.GEOGRAPHY,
                reason=f"Business city '{business.city}' is not in: {', '.join(geography.cities)}",
                evidence={"actual": business.city, "cities": list(geography.cities)},
            )

    return None


def check_industry(
    scope: Optional[RuleScope], business: BusinessInput
) -> Optional[ApplicabilityResult]:
    """Evaluate the industry gate (NAICS prefix match against any listed prefix)."""
    industries = scope.industries if scope else None
    if not industries:
        return None

    prefixes = [industry.naics_prefix for industry in industries]
    if business.naics and any(business.naics.startswith(prefix) for prefix in prefixes):
        return None

    return ApplicabilityResult(
        applies=False,
        failed_gate=Gate.INDUSTRY,
        reason=f"Business NAICS '{business.naics}' does not start with any of: {', '.join(prefixes)}",
        evidence={"actual": business.naics, "naics_prefixes": prefixes},
    )


def check_headcount(
    scope: Optional[RuleScope], business: BusinessInput
) -> Optional[ApplicabilityResult]:
    """Evaluate the minimum headcount gate. Missing employee counts read as 0."""
    min_employees = scope.min_employees if scope else None
    if min_employees is None:
        return None

    employees = business.employees or 0
    if employees < min_employees:
        return ApplicabilityResult(
            applies=False,
            failed_gate=Gate.HEADCOUNT,
            reason=f"Business has {employees} employees (requirement: {min_employees})",
            evidence={"actual": employees, "min_employees": min_employees},
        )

    return None
