"""Rule engine foundation: evaluation results and configuration errors."""

from dataclasses import dataclass, field
from typing import Optional

from regmatch.core.enums import Gate


class RuleConfigurationError(ValueError):
    """
    Raised when a rule's definition cannot be evaluated.

    This signals a data-integrity defect in the rule catalog (for example an
    unrecognized custom predicate name), not a problem with the business
    input. It is never masked as a non-match.
    """

    def __init__(self, message: str, rule_title: Optional[str] = None):
        self.rule_title = rule_title
        if rule_title:
            message = f"{message} (rule: {rule_title!r})"
        super().__init__(message)


@dataclass(frozen=True)
class ApplicabilityResult:
    """
    Result of evaluating a single rule against a business profile.

    Attributes:
        applies: Whether every gate and the conditions passed
        failed_gate: The first gate that rejected the rule, None if it applies
        reason: Human-readable explanation of the result
        evidence: Actual vs. required values for the deciding check
    """

    applies: bool
    failed_gate: Optional[Gate] = None
    reason: Optional[str] = None
    evidence: dict = field(default_factory=dict)


@dataclass(frozen=True)
class RuleProblem:
    """
    Configuration problem found by static validation of a rule.

    Attributes:
        message: Description of the problem
        fatal: True if evaluating the rule would raise RuleConfigurationError,
            False if the predicate would only evaluate to a silent non-match
    """

    message: str
    fatal: bool = False

    def __str__(self) -> str:
        return self.message
