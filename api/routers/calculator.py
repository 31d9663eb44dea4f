"""
Calculator router.

Stateless computations served to clients:
- /calculator/elevation: energy + rider weight -> height climbed and landmark text
- /calculator/estimate: MET/heart-rate energy estimate for workouts without a power meter
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_estimate_energy_use_case, get_profile_repo
from application.exceptions import MissingPrerequisiteError
from application.ports import ProfileRepository
from application.use_cases import EstimateEnergyUseCase
from backend.core.calorie_estimator import EstimatorWorkout
from backend.core.physics import calculate_elevation
from domain.models import UserProfile
from domain.models.units import WeightUnit, to_kg

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/calculator",
    tags=["Calculator"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class ElevationRequest(BaseModel):
    """Energy and rider weight; non-positive values yield the zero state."""
    energy_kj: float = Field(description="Workout output in kilojoules")
    weight: float = Field(description="Rider weight")
    weight_unit: WeightUnit = "kg"


class ElevationResponse(BaseModel):
    meters: float
    feet: float
    landmark_text: str


class EstimateRequest(BaseModel):
    """Workout descriptors for an energy estimate."""
    description: str = Field(default="", max_length=500)
    intensity: Optional[int] = Field(default=None, ge=1, le=10)
    duration_minutes: Optional[float] = Field(default=None, ge=0)
    heart_rate_bpm: Optional[float] = Field(default=None, ge=0)


class EstimateResponse(BaseModel):
    calories: int
    kj: int
    met_used: float
    activity: str
    heart_rate_blended: bool
    explanation: str


class MissingFieldsDetail(BaseModel):
    message: str
    missing_fields: List[str]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/elevation", response_model=ElevationResponse)
def elevation(request: ElevationRequest):
    """Convert energy output to elevation climbed."""
    result = calculate_elevation(request.energy_kj, to_kg(request.weight, request.weight_unit))
    return ElevationResponse(meters=result.meters, feet=result.feet, landmark_text=result.landmark_text)


@router.post(
    "/estimate",
    response_model=EstimateResponse,
    responses={422: {"model": MissingFieldsDetail}},
)
def estimate(
    request: EstimateRequest,
    user_id: str = Depends(get_current_user),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
    use_case: EstimateEnergyUseCase = Depends(get_estimate_energy_use_case),
):
    """
    Estimate workout energy from the user's profile and workout descriptors.

    Returns 422 listing the missing fields when the profile or request lacks
    age, weight, gender, height, duration or intensity.
    """
    profile = profile_repo.get(user_id) or UserProfile()
    workout = EstimatorWorkout(
        description=request.description,
        intensity=request.intensity,
        duration_minutes=request.duration_minutes,
        heart_rate_bpm=request.heart_rate_bpm,
    )

    try:
        result = use_case.execute(profile, workout)
    except MissingPrerequisiteError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "missing_fields": e.missing_fields},
        )

    return EstimateResponse(
        calories=result.calories,
        kj=result.kj,
        met_used=result.met_used,
        activity=result.activity,
        heart_rate_blended=result.heart_rate_blended,
        explanation=result.explanation,
    )
