"""Readiness evaluator mapping a device health snapshot to a verdict.

Folds the ordered penalty rules over a snapshot, sums their points, and
classifies the resulting score.
"""

from typing import List, Optional, Sequence

import structlog

from safe_update.models.enums import ReadinessStatus
from safe_update.models.readiness import Penalty, UpdateReadiness
from safe_update.models.snapshot import DeviceHealthSnapshot
from safe_update.readiness.rules import DEFAULT_RULES, PenaltyRule
from safe_update.readiness.thresholds import (
    DEFAULT_THRESHOLDS,
    ReadinessThresholds,
)

log = structlog.get_logger()


def classify(
    score: int, thresholds: ReadinessThresholds = DEFAULT_THRESHOLDS
) -> ReadinessStatus:
    """Map a score to its readiness status.

    Args:
        score: Final readiness score (may be negative)
        thresholds: Classification cut-offs

    Returns:
        SAFE at or above safe_min_score, WARNING at or above
        warning_min_score, RISKY otherwise
    """
    if score >= thresholds.safe_min_score:
        return ReadinessStatus.SAFE
    if score >= thresholds.warning_min_score:
        return ReadinessStatus.WARNING
    return ReadinessStatus.RISKY


class ReadinessEvaluator:
    """Evaluator for device update readiness.

    Holds no per-call state, so one instance can be shared across threads.
    """

    def __init__(
        self,
        thresholds: Optional[ReadinessThresholds] = None,
        rules: Optional[Sequence[PenaltyRule]] = None,
    ):
        """Initialize the evaluator with optional custom thresholds and rules.

        Args:
            thresholds: Custom thresholds. Defaults to DEFAULT_THRESHOLDS.
            rules: Ordered penalty rules. Defaults to DEFAULT_RULES.
        """
        self._thresholds = thresholds or DEFAULT_THRESHOLDS
        self._rules = tuple(rules) if rules is not None else tuple(DEFAULT_RULES)

    @property
    def thresholds(self) -> ReadinessThresholds:
        return self._thresholds

    def evaluate(self, snapshot: DeviceHealthSnapshot) -> UpdateReadiness:
        """Evaluate a snapshot and produce an update-readiness verdict.

        Args:
            snapshot: Fully populated device health snapshot

        Returns:
            UpdateReadiness with score, status, and suggestions in rule order
        """
        penalties: List[Penalty] = []
        for rule in self._rules:
            penalty = rule(snapshot, self._thresholds)
            if penalty is not None:
                penalties.append(penalty)

        # Not floored at 0: many penalties can drive the score negative
        score = self._thresholds.initial_score - sum(p.points for p in penalties)
        status = classify(score, self._thresholds)

        log.debug(
            "readiness_evaluated",
            score=score,
            status=status.value,
            penalty_count=len(penalties),
        )

        return UpdateReadiness(
            score=score,
            status=status,
            suggestions=[p.suggestion for p in penalties],
            penalties=penalties,
        )


_default_evaluator = ReadinessEvaluator()


def evaluate(snapshot: DeviceHealthSnapshot) -> UpdateReadiness:
    """Evaluate a snapshot with the default thresholds and rules."""
    return _default_evaluator.evaluate(snapshot)
