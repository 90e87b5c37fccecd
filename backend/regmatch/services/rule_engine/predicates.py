"""Predicate evaluation: custom checks, field accessors and operators."""

import math
import re
from typing import Any, Callable, Dict, Optional

from regmatch.core.enums import BusinessField, CustomPredicateName, Operator
from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.rule import CustomPredicate, FieldPredicate, Predicate
from regmatch.services.rule_engine.base import RuleConfigurationError

Accessor = Callable[[BusinessInput], Any]
Comparison = Callable[[Any, Any], bool]


FIELD_ACCESSORS: Dict[BusinessField, Accessor] = {
    BusinessField.STATE: lambda b: b.state,
    BusinessField.CITY: lambda b: b.city,
    BusinessField.ZIP: lambda b: b.zip,
    BusinessField.NAICS: lambda b: b.naics,
    BusinessField.EMPLOYEES: lambda b: b.employees,
    BusinessField.REVENUE_USD: lambda b: b.revenue_usd,
    BusinessField.PUBLIC_FACING: lambda b: b.public_facing,
    BusinessField.HAS_EMPLOYEES: lambda b: b.has_employees,
    BusinessField.HANDLES_PHI: lambda b: b.handles_phi,
    BusinessField.SERVES_ALCOHOL: lambda b: b.serves_alcohol,
    BusinessField.HANDLES_FOOD: lambda b: b.handles_food,
    BusinessField.COLLECTS_PII: lambda b: b.collects_pii,
    BusinessField.ECOMMERCE: lambda b: b.ecommerce,
    BusinessField.OUTDOOR_WORK: lambda b: b.outdoor_work,
    BusinessField.EXPOSURE_BLOOD: lambda b: b.exposure_blood,
}


CUSTOM_CHECKS: Dict[CustomPredicateName, Callable[[BusinessInput], bool]] = {
    CustomPredicateName.HAS_EMPLOYEES: lambda b: b.has_employees and (b.employees or 0) > 0,
    CustomPredicateName.IS_PUBLIC_FACING: lambda b: b.public_facing,
    CustomPredicateName.HANDLES_PHI: lambda b: b.handles_phi,
    CustomPredicateName.SERVES_ALCOHOL: lambda b: b.serves_alcohol,
    CustomPredicateName.HANDLES_FOOD: lambda b: b.handles_food,
    CustomPredicateName.COLLECTS_PII: lambda b: b.collects_pii,
}


def read_field(business: BusinessInput, field: str) -> Any:
    """
    Read a business attribute by its wire name.

    Names outside the BusinessField vocabulary read as absent (None).
    """
    try:
        accessor = FIELD_ACCESSORS[BusinessField(field)]
    except ValueError:
        return None
    return accessor(business)


def strict_equals(left: Any, right: Any) -> bool:
    """
    Equality that requires matching kinds of value.

    Booleans never equal numbers, and numbers never equal strings, so
    ``True`` does not match ``1`` and ``5`` does not match ``"5"``.
    Ints and floats compare by value.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if _is_number(left) and _is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return left == right


# Numeric string forms accepted for ordering comparisons: signed decimals
# with optional exponent, "Infinity", and unsigned 0x/0o/0b integers.
_DECIMAL_STRING = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_PREFIXED_INT_STRING = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def to_number(value: Any) -> float:
    """
    Coerce a value for ordering comparisons.

    Numbers pass through (integers beyond float range become +/-inf),
    booleans become 1/0, numeric strings are parsed (blank strings become
    0). Strings such as "1_000", "inf" or "nan" are not numeric. Anything
    else is NaN, which fails every ordering comparison.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _DECIMAL_STRING.fullmatch(text):
            return float(text)
        if _PREFIXED_INT_STRING.fullmatch(text):
            return _int_to_float(int(text, 0))
        return math.nan
    return math.nan


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _ordering(compare: Comparison) -> Comparison:
    # Absent left operands compare as 0
    def evaluate(left: Any, right: Any) -> bool:
        return compare(to_number(0 if left is None else left), to_number(right))

    return evaluate


def _contains(left: Any, right: Any) -> bool:
    return isinstance(right, list) and any(strict_equals(left, item) for item in right)


def _starts_with(left: Any, right: Any) -> bool:
    return isinstance(left, str) and isinstance(right, str) and left.startswith(right)


OPERATORS: Dict[Operator, Comparison] = {
    Operator.EQ: strict_equals,
    Operator.NEQ: lambda left, right: not strict_equals(left, right),
    Operator.GTE: _ordering(lambda left, right: left >= right),
    Operator.GT: _ordering(lambda left, right: left > right),
    Operator.LTE: _ordering(lambda left, right: left <= right),
    Operator.LT: _ordering(lambda left, right: left < right),
    Operator.IN: _contains,
    Operator.STARTS_WITH: _starts_with,
}


def evaluate_custom(
    predicate: CustomPredicate,
    business: BusinessInput,
    rule_title: Optional[str] = None,
) -> bool:
    """
    Evaluate a named composite check.

    Raises:
        RuleConfigurationError: If the name is not in the custom vocabulary
    """
    try:
        check = CUSTOM_CHECKS[CustomPredicateName(predicate.custom)]
    except ValueError:
        raise RuleConfigurationError(
            f"Unknown custom predicate '{predicate.custom}'", rule_title=rule_title
        ) from None
    return bool(check(business))


def evaluate_field(predicate: FieldPredicate, business: BusinessInput) -> bool:
    """Evaluate a field comparison. Unrecognized operators evaluate to False."""
    try:
        compare = OPERATORS[Operator(predicate.op)]
    except ValueError:
        return False
    return compare(read_field(business, predicate.field), predicate.value)


def evaluate_predicate(
    predicate: Predicate,
    business: BusinessInput,
    rule_title: Optional[str] = None,
) -> bool:
    """Dispatch a predicate to the evaluator for its kind."""
    if isinstance(predicate, CustomPredicate):
        return evaluate_custom(predicate, business, rule_title=rule_title)
    return evaluate_field(predicate, business)
