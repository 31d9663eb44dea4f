"""
Challenge templates, instances and their contribution ledger.

A template is a reusable goal definition (climb 828 m, ride 100 km). An
instance is one activation of a template by the user and owns the ordered
list of contributions credited to it. Progress is never stored on its own:
it is always the sum of the contribution amounts.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, computed_field

# Absolute, unit-consistent tolerance used for completion checks
COMPLETION_EPSILON = 0.1


class ChallengeKind(str, Enum):
    """
    What a challenge measures.

    - CLIMBING: elevation in meters, fed by energy-based workouts
    - DISTANCE: distance in kilometers, fed by distance-based workouts
    """

    CLIMBING = "climbing"
    DISTANCE = "distance"

    @property
    def unit(self) -> str:
        return "m" if self is ChallengeKind.CLIMBING else "km"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChallengeTemplate(BaseModel):
    """
    Immutable goal definition from the built-in catalog or user-defined.

    Examples:
        >>> ChallengeTemplate(id="burj", title="Burj Khalifa", kind="climbing", target=828)
    """

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    kind: ChallengeKind
    target: float = Field(..., gt=0, description="Meters for climbing, kilometers for distance")
    is_custom: bool = Field(default=False)

    model_config = {"frozen": True}


class Contribution(BaseModel):
    """Amount credited from one workout toward one challenge instance."""

    workout_id: str
    amount: float = Field(..., ge=0)
    applied_at: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True}


class ChallengeInstance(BaseModel):
    """
    A user's active attempt at a challenge template.

    ``progress`` is derived from ``contributions`` so the two can never
    diverge. Contributions are appended and removed through the challenge
    engine (``backend.core.challenge_engine``).
    """

    instance_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    template_id: str
    title: str
    kind: ChallengeKind
    target: float = Field(..., gt=0)
    contributions: List[Contribution] = Field(default_factory=list)
    activated_at: datetime = Field(default_factory=_utcnow)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress(self) -> float:
        """Cumulative progress, the sum of every contribution amount."""
        return max(0.0, sum(c.amount for c in self.contributions))

    @property
    def is_complete(self) -> bool:
        """Complete once progress is within COMPLETION_EPSILON of the target."""
        return self.progress >= self.target - COMPLETION_EPSILON

    @property
    def percent_complete(self) -> float:
        """Progress as a percentage of target, capped at 100."""
        return round(min(100.0, self.progress / self.target * 100), 1)

    @property
    def remaining(self) -> float:
        return max(0.0, self.target - self.progress)

    @property
    def workout_ids(self) -> List[str]:
        """Distinct workout ids credited to this instance, in order."""
        seen: List[str] = []
        for contribution in self.contributions:
            if contribution.workout_id not in seen:
                seen.append(contribution.workout_id)
        return seen

    def has_contribution_from(self, workout_id: str) -> bool:
        return any(c.workout_id == workout_id for c in self.contributions)
