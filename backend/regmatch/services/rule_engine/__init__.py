"""Rule engine for deciding which regulatory rules apply to a business."""

from .base import ApplicabilityResult, RuleConfigurationError, RuleProblem
from .engine import ApplicabilityEngine, applies, filter_applicable

__all__ = [
    "ApplicabilityEngine",
    "ApplicabilityResult",
    "RuleConfigurationError",
    "RuleProblem",
    "applies",
    "filter_applicable",
]
