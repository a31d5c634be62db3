"""Update-readiness scoring: thresholds, penalty rules, and evaluator."""

from safe_update.readiness.evaluator import ReadinessEvaluator, classify, evaluate
from safe_update.readiness.rules import DEFAULT_RULES, PenaltyRule
from safe_update.readiness.thresholds import (
    DEFAULT_THRESHOLDS,
    ReadinessThresholds,
)

__all__ = [
    "DEFAULT_RULES",
    "DEFAULT_THRESHOLDS",
    "PenaltyRule",
    "ReadinessEvaluator",
    "ReadinessThresholds",
    "classify",
    "evaluate",
]
