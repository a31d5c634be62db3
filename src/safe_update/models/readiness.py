"""Readiness verdict models produced by the evaluator."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from safe_update.models.enums import PenaltyCategory, ReadinessStatus


@dataclass(frozen=True)
class Penalty:
    """Deduction produced by a penalty rule that fired."""

    category: PenaltyCategory
    points: int
    suggestion: str


@dataclass(frozen=True)
class UpdateReadiness:
    """Update-readiness verdict for a single snapshot.

    The score starts at 100 and is never floored or capped, so a snapshot
    with many simultaneous penalties yields a negative score.
    """

    score: int
    status: ReadinessStatus
    suggestions: List[str] = field(default_factory=list)
    penalties: List[Penalty] = field(default_factory=list)

    @property
    def is_safe(self) -> bool:
        """Check if the device may be updated without caution."""
        return self.status == ReadinessStatus.SAFE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the verdict to JSON-compatible primitives."""
        return {
            "score": self.score,
            "status": self.status.value,
            "suggestions": list(self.suggestions),
            "penalties": [
                {
                    "category": penalty.category.value,
                    "points": penalty.points,
                    "suggestion": penalty.suggestion,
                }
                for penalty in self.penalties
            ],
        }
