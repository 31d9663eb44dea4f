"""
Workouts router for the workout ledger.

Endpoints:
- GET /workouts: history, newest first, with elevation per energy workout
- POST /workouts: log a workout (provisional id swapped once persisted)
- PATCH /workouts/{workout_id}: edit fields; recorded contributions are not recomputed
- DELETE /workouts/{workout_id}: delete and reverse challenge contributions
"""
import logging
from datetime import date as date_type
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, ValidationError

from api.deps import (
    get_delete_workout_use_case,
    get_log_workout_use_case,
    get_progress_state,
    get_settings,
    get_update_workout_use_case,
)
from application.use_cases import DeleteWorkoutUseCase, LogWorkoutUseCase, UpdateWorkoutUseCase
from backend.core.progress_aggregator import workout_elevation_meters
from backend.settings import Settings
from domain.models import ProgressState, Workout, WorkoutMetric

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class WorkoutCreateRequest(BaseModel):
    """A workout to log. ``metric`` is {"kind": "energy", "kj": ...} or {"kind": "distance", "miles": ...}."""
    date: date_type
    type: str = "bike"
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    metric: WorkoutMetric
    cadence: Optional[float] = None
    speed: Optional[float] = None
    resistance: Optional[float] = None
    elevation_ft: Optional[float] = None
    pace: Optional[str] = None
    heart_rate: Optional[int] = None
    intensity: Optional[int] = None
    calories: Optional[float] = None
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2024-05-01",
                "type": "bike",
                "duration_minutes": 45,
                "metric": {"kind": "energy", "kj": 400},
            }
        }


class WorkoutUpdateRequest(BaseModel):
    """Fields to change; omitted fields are kept."""
    date: Optional[date_type] = None
    type: Optional[str] = None
    duration_minutes: Optional[int] = None
    metric: Optional[WorkoutMetric] = None
    cadence: Optional[float] = None
    speed: Optional[float] = None
    resistance: Optional[float] = None
    elevation_ft: Optional[float] = None
    pace: Optional[str] = None
    heart_rate: Optional[int] = None
    intensity: Optional[int] = None
    calories: Optional[float] = None
    notes: Optional[str] = None


class WorkoutListResponse(BaseModel):
    workouts: List[Dict[str, Any]]
    count: int


class LogWorkoutResponse(BaseModel):
    workout: Dict[str, Any]
    persisted: bool
    elevation: Optional[Dict[str, Any]] = None
    new_badges: List[str] = Field(default_factory=list)
    message: Optional[str] = None


class UpdateWorkoutResponse(BaseModel):
    workout: Dict[str, Any]
    persisted: bool
    new_badges: List[str] = Field(default_factory=list)
    message: Optional[str] = None


class DeleteWorkoutResponse(BaseModel):
    workout_id: str
    affected_instances: int
    revoked_trophies: List[str] = Field(default_factory=list)
    persisted: bool
    message: Optional[str] = None


def workout_payload(workout: Workout, rider_weight_kg: float) -> Dict[str, Any]:
    """Serialize a workout with its derived elevation and distance."""
    payload = workout.model_dump(mode="json")
    payload["elevation_meters"] = workout_elevation_meters(workout, rider_weight_kg)
    payload["distance_km"] = workout.distance_km
    payload["provisional"] = workout.is_provisional
    return payload


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=WorkoutListResponse)
def list_workouts(
    state: ProgressState = Depends(get_progress_state),
    settings: Settings = Depends(get_settings),
):
    """Get the workout history, newest first."""
    rider_weight_kg = state.profile.rider_weight_kg(settings.default_rider_weight_kg)
    workouts = sorted(state.workouts, key=lambda w: w.date, reverse=True)
    return WorkoutListResponse(
        workouts=[workout_payload(w, rider_weight_kg) for w in workouts],
        count=len(workouts),
    )


@router.post("", response_model=LogWorkoutResponse, status_code=status.HTTP_201_CREATED)
def log_workout(
    request: WorkoutCreateRequest,
    state: ProgressState = Depends(get_progress_state),
    use_case: LogWorkoutUseCase = Depends(get_log_workout_use_case),
    settings: Settings = Depends(get_settings),
):
    """Log a workout and unlock any badges the new lifetime total reaches."""
    try:
        workout = Workout.model_validate(request.model_dump())
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
        )
    result = use_case.execute(state, workout)

    rider_weight_kg = state.profile.rider_weight_kg(settings.default_rider_weight_kg)
    elevation = None
    if result.elevation is not None:
        elevation = {
            "meters": result.elevation.meters,
            "feet": result.elevation.feet,
            "landmark_text": result.elevation.landmark_text,
        }
    return LogWorkoutResponse(
        workout=workout_payload(result.workout, rider_weight_kg),
        persisted=result.persisted,
        elevation=elevation,
        new_badges=[b.id for b in result.new_badges],
        message=result.error,
    )


@router.patch("/{workout_id}", response_model=UpdateWorkoutResponse)
def update_workout(
    workout_id: str,
    request: WorkoutUpdateRequest,
    state: ProgressState = Depends(get_progress_state),
    use_case: UpdateWorkoutUseCase = Depends(get_update_workout_use_case),
    settings: Settings = Depends(get_settings),
):
    """Edit a workout. Contributions already credited to challenges are unchanged."""
    result = use_case.execute(state, workout_id, request.model_dump(exclude_unset=True))

    if result.not_found:
        raise HTTPException(status_code=404, detail=result.error)
    if not result.success:
        raise HTTPException(
            status_code=422,
            detail={"message": result.error, "validation_errors": result.validation_errors},
        )

    rider_weight_kg = state.profile.rider_weight_kg(settings.default_rider_weight_kg)
    return UpdateWorkoutResponse(
        workout=workout_payload(result.workout, rider_weight_kg),
        persisted=result.persisted,
        new_badges=[b.id for b in result.new_badges],
        message=result.error,
    )


@router.delete("/{workout_id}", response_model=DeleteWorkoutResponse)
def delete_workout(
    workout_id: str,
    state: ProgressState = Depends(get_progress_state),
    use_case: DeleteWorkoutUseCase = Depends(get_delete_workout_use_case),
):
    """Delete a workout and reverse everything it contributed to challenges."""
    result = use_case.execute(state, workout_id)

    if result.not_found:
        raise HTTPException(status_code=404, detail=result.error)

    return DeleteWorkoutResponse(
        workout_id=workout_id,
        affected_instances=result.affected_instances,
        revoked_trophies=[t.id for t in result.revoked_trophies],
        persisted=result.persisted,
        message=result.error,
    )
