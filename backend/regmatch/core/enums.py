"""Core enums for type safety across the application."""

from enum import Enum


class Jurisdiction(str, Enum):
    """Level of government that issues a rule."""

    FEDERAL = "federal"
    STATE = "state"
    LOCAL = "local"


class ConditionMode(str, Enum):
    """How a rule's predicates are combined."""

    ALL = "all"
    ANY = "any"


class Operator(str, Enum):
    """Comparison operators recognized by field predicates."""

    EQ = "eq"
    NEQ = "neq"
    GTE = "gte"
    GT = "gt"
    LTE = "lte"
    LT = "lt"
    IN = "in"
    STARTS_WITH = "startsWith"


class CustomPredicateName(str, Enum):
    """Named composite checks a rule may reference."""

    HAS_EMPLOYEES = "hasEmployees"
    IS_PUBLIC_FACING = "isPublicFacing"
    HANDLES_PHI = "handlesPHI"
    SERVES_ALCOHOL = "servesAlcohol"
    HANDLES_FOOD = "handlesFood"
    COLLECTS_PII = "collectsPII"


class BusinessField(str, Enum):
    """Business profile attributes addressable by field predicates (wire names)."""

    STATE = "state"
    CITY = "city"
    ZIP = "zip"
    NAICS = "naics"
    EMPLOYEES = "employees"
    REVENUE_USD = "revenueUSD"
    PUBLIC_FACING = "publicFacing"
    HAS_EMPLOYEES = "hasEmployees"
    HANDLES_PHI = "handlesPHI"
    SERVES_ALCOHOL = "servesAlcohol"
    HANDLES_FOOD = "handlesFood"
    COLLECTS_PII = "collectsPII"
    ECOMMERCE = "ecommerce"
    OUTDOOR_WORK = "outdoorWork"
    EXPOSURE_BLOOD = "exposureBlood"


class Gate(str, Enum):
    """Evaluation stages of the applicability engine, in order."""

    GEOGRAPHY = "geography"
    INDUSTRY = "industry"
    HEADCOUNT = "headcount"
    CONDITIONS = "conditions"
