"""Rule applicability engine: decides which rules apply to a business."""

from typing import Callable, Iterable, List, Optional, TypeVar

from regmatch.core.enums import (
    BusinessField,
    ConditionMode,
    CustomPredicateName,
    Gate,
    Operator,
)
from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.rule import CustomPredicate, RuleDefinition
from regmatch.services.rule_engine.base import ApplicabilityResult, RuleProblem
from regmatch.services.rule_engine.predicates import evaluate_predicate
from regmatch.services.rule_engine.scope import (
    check_geography,
    check_headcount,
    check_industry,
)

T = TypeVar("T")

ScopeGate = Callable[..., Optional[ApplicabilityResult]]


class ApplicabilityEngine:
    """
    Stateless evaluator deciding whether a rule applies to a business.

    Evaluation runs in strict order and stops at the first failure:

    1. Geography gate (country, states, cities)
    2. Industry gate (NAICS prefix, any-of)
    3. Headcount gate (minimum employees)
    4. Conditions (predicates combined with ``all`` or ``any``)

    The engine never mutates its inputs and keeps no per-call state, so a
    single instance can be shared across threads and tasks.
    """

    def __init__(self):
        """Initialize the engine with its ordered scope gates."""
        self._scope_gates: List[ScopeGate] = [
            check_geography,
            check_industry,
            check_headcount,
        ]

    def evaluate(
        self, rule: RuleDefinition, business: BusinessInput
    ) -> ApplicabilityResult:
        """
        Evaluate a rule against a business profile.

        Args:
            rule: The rule definition (scope and conditions)
            business: The validated business profile

        Returns:
            ApplicabilityResult with the outcome and the deciding gate

        Raises:
            RuleConfigurationError: If a predicate names an unknown custom check
        """
        for gate in self._scope_gates:
            failure = gate(rule.scope, business)
            if failure is not None:
                return failure

        mode = rule.conditions.mode
        predicates = rule.conditions.predicates
        # Every predicate runs so a malformed one raises regardless of the others
        outcomes = [
            evaluate_predicate(predicate, business, rule_title=rule.title)
            for predicate in predicates
        ]

        if mode == ConditionMode.ALL:
            passed = all(outcomes)
        else:
            passed = any(outcomes)

        if passed:
            return ApplicabilityResult(
                applies=True,
                reason=f"All scope gates passed and conditions ({mode.value}) are satisfied",
            )

        return ApplicabilityResult(
            applies=False,
            failed_gate=Gate.CONDITIONS,
            reason=f"Conditions ({mode.value}) not satisfied by {len(predicates)} predicate(s)",
            evidence={"mode": mode.value, "predicate_count": len(predicates)},
        )

    def applies(self, rule: RuleDefinition, business: BusinessInput) -> bool:
        """Return True if the rule applies to the business."""
        return self.evaluate(rule, business).applies

    def filter_applicable(
        self,
        rules: Iterable[T],
        business: BusinessInput,
        key: Optional[Callable[[T], RuleDefinition]] = None,
    ) -> List[T]:
        """
        Keep the rules that apply to the business, preserving input order.

        Args:
            rules: Candidate rules
            business: The validated business profile
            key: Optional function mapping each item to its RuleDefinition,
                for filtering records that wrap a definition

        Returns:
            The applicable items, in their original order
        """
        if key is None:
            return [rule for rule in rules if self.applies(rule, business)]
        return [item for item in rules if self.applies(key(item), business)]

    def validate_rule(self, rule: RuleDefinition) -> List[RuleProblem]:
        """
        Statically check a rule definition for configuration problems.

        Reports unknown custom predicate names, unknown operators, unknown
        fields and ``in`` predicates whose value is not a list. Only unknown
        custom names make evaluation raise; the other findings evaluate to a
        silent non-match and are worth surfacing at ingest time.

        Args:
            rule: The rule definition to check

        Returns:
            List of problems (empty if the rule is well formed)
        """
        problems: List[RuleProblem] = []
        custom_names = {name.value for name in CustomPredicateName}
        operators = {op.value for op in Operator}
        fields = {field.value for field in BusinessField}

        for index, predicate in enumerate(rule.conditions.predicates):
            if isinstance(predicate, CustomPredicate):
                if predicate.custom not in custom_names:
                    problems.append(
                        RuleProblem(
                            f"predicate {index}: unknown custom predicate '{predicate.custom}'",
                            fatal=True,
                        )
                    )
                continue

            if predicate.op not in operators:
                problems.append(RuleProblem(f"predicate {index}: unknown operator '{predicate.op}'"))
            if predicate.field not in fields:
                problems.append(RuleProblem(f"predicate {index}: unknown field '{predicate.field}'"))
            if predicate.op == Operator.IN.value and not isinstance(predicate.value, list):
                problems.append(RuleProblem(f"predicate {index}: 'in' requires a list value"))

        return problems


_default_engine = ApplicabilityEngine()


def applies(rule: RuleDefinition, business: BusinessInput) -> bool:
    """Return True if the rule applies to the business."""
    return _default_engine.applies(rule, business)


def filter_applicable(
    rules: Iterable[T],
    business: BusinessInput,
    key: Optional[Callable[[T], RuleDefinition]] = None,
) -> List[T]:
    """Keep the rules that apply to the business, preserving input order."""
    return _default_engine.filter_applicable(rules, business, key=key)
