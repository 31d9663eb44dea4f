"""
Workout aggregate - a single logged training session.

A workout carries exactly one primary metric: either the energy output of
the session (kilojoules, which feeds elevation climbed) or the distance
covered (miles, which feeds distance challenges). The metric is a tagged
union so computations branch on ``metric.kind`` instead of sniffing which
optional field happens to be populated.
"""

import uuid
from datetime import date as date_type, datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from domain.models.units import miles_to_km

PROVISIONAL_ID_PREFIX = "tmp-"


class WorkoutType(str, Enum):
    """
    Workout types the engine knows how to bucket.

    Any other lowercase string is accepted as a custom type; custom types
    count toward total distance but not toward the cycling/running buckets.
    """

    BIKE = "bike"
    RUN = "run"
    WALK = "walk"
    HIKE = "hike"


RUNNING_TYPES = frozenset({WorkoutType.RUN.value, WorkoutType.WALK.value, WorkoutType.HIKE.value})


class EnergyMetric(BaseModel):
    """Energy output of a session in kilojoules."""

    kind: Literal["energy"] = "energy"
    kj: float = Field(..., ge=0, description="Total output in kilojoules")

    model_config = {"frozen": True}


class DistanceMetric(BaseModel):
    """Distance covered in a session, recorded in miles."""

    kind: Literal["distance"] = "distance"
    miles: float = Field(..., ge=0, description="Distance covered in miles")

    @property
    def km(self) -> float:
        """Distance in kilometers."""
        return miles_to_km(self.miles)

    model_config = {"frozen": True}


WorkoutMetric = Annotated[Union[EnergyMetric, DistanceMetric], Field(discriminator="kind")]


def new_provisional_id() -> str:
    """Generate a client-side id used until persistence confirms the record."""
    return f"{PROVISIONAL_ID_PREFIX}{uuid.uuid4().hex}"


class Workout(BaseModel):
    """
    Aggregate root representing one logged workout.

    Examples:
        >>> workout = Workout(
        ...     date=date(2024, 3, 1),
        ...     type="bike",
        ...     duration_minutes=45,
        ...     metric=EnergyMetric(kj=400),
        ... )
        >>> workout.energy_kj
        400.0
    """

    # Identity
    id: Optional[str] = Field(
        default=None,
        description="Persisted id, a 'tmp-' provisional id, or None before logging",
    )

    # Core fields
    date: date_type = Field(..., description="Calendar date of the session")
    type: str = Field(default=WorkoutType.BIKE.value, description="bike/run/walk/hike or a custom type")
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    metric: WorkoutMetric

    # Optional detail
    cadence: Optional[float] = Field(default=None, ge=0)
    speed: Optional[float] = Field(default=None, ge=0)
    resistance: Optional[float] = Field(default=None, ge=0)
    elevation_ft: Optional[float] = Field(default=None, ge=0)
    pace: Optional[str] = None
    heart_rate: Optional[int] = Field(default=None, ge=0)
    intensity: Optional[int] = Field(default=None, ge=1, le=10)
    calories: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=2000)

    created_at: Optional[datetime] = None

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        """Lowercase and strip the workout type."""
        normalized = (v or "").strip().lower()
        if not normalized:
            raise ValueError("Workout type cannot be empty")
        return normalized

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_energy_based(self) -> bool:
        return self.metric.kind == "energy"

    @property
    def is_distance_based(self) -> bool:
        return self.metric.kind == "distance"

    @property
    def energy_kj(self) -> Optional[float]:
        """Energy output in kJ, or None for distance-based workouts."""
        return self.metric.kj if isinstance(self.metric, EnergyMetric) else None

    @property
    def distance_km(self) -> Optional[float]:
        """Distance in km, or None for energy-based workouts."""
        return self.metric.km if isinstance(self.metric, DistanceMetric) else None

    @property
    def is_cycling(self) -> bool:
        return self.type == WorkoutType.BIKE.value

    @property
    def is_running(self) -> bool:
        return self.type in RUNNING_TYPES

    @property
    def is_provisional(self) -> bool:
        """True while the record only exists locally."""
        return self.id is None or self.id.startswith(PROVISIONAL_ID_PREFIX)

    # -------------------------------------------------------------------------
    # Domain Methods (return new instances)
    # -------------------------------------------------------------------------

    def with_id(self, workout_id: str) -> "Workout":
        """Return a copy carrying the given id."""
        return self.model_copy(update={"id": workout_id})

    def provisional(self) -> "Workout":
        """Return a copy stamped with a fresh provisional id and creation time."""
        return self.model_copy(
            update={
                "id": new_provisional_id(),
                "created_at": self.created_at or datetime.now(timezone.utc),
            }
        )
