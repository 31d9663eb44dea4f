"""
Progress router: lifetime totals, weekly goal progress, badges and challenges.
"""
from datetime import date as date_type
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.deps import get_load_progress_use_case, get_progress_state
from api.routers.challenges import InstanceResponse
from application.use_cases import LoadProgressUseCase
from domain.models import ProgressState

router = APIRouter(
    prefix="/progress",
    tags=["Progress"],
)


class TotalsResponse(BaseModel):
    climbing_meters: float
    climbing_feet: float
    distance_km: float
    distance_miles: float
    cycling_distance_km: float
    cycling_distance_miles: float
    running_distance_km: float
    running_distance_miles: float
    workout_count: int


class WeeklyResponse(BaseModel):
    week_start: date_type
    week_end: date_type
    climbed_meters: float
    goal_meters: Optional[float] = None
    percent: float
    goal_reached: bool


class ProgressResponse(BaseModel):
    rider_weight_kg: float
    totals: TotalsResponse
    weekly: WeeklyResponse
    unlocked_badges: List[str]
    trophy_count: int
    active_challenges: List[InstanceResponse]


@router.get("", response_model=ProgressResponse)
def get_progress(
    week_of: Optional[date_type] = Query(None, description="Any day of the week to report (default today)"),
    state: ProgressState = Depends(get_progress_state),
    use_case: LoadProgressUseCase = Depends(get_load_progress_use_case),
):
    """Lifetime totals recomputed from the full history plus this week's goal progress."""
    summary = use_case.summarize(state, today=week_of)
    totals = summary.totals
    return ProgressResponse(
        rider_weight_kg=summary.rider_weight_kg,
        totals=TotalsResponse(
            climbing_meters=round(totals.climbing_meters, 2),
            climbing_feet=round(totals.climbing_feet, 2),
            distance_km=round(totals.distance_km, 2),
            distance_miles=round(totals.distance_miles, 2),
            cycling_distance_km=round(totals.cycling_distance_km, 2),
            cycling_distance_miles=round(totals.cycling_distance_miles, 2),
            running_distance_km=round(totals.running_distance_km, 2),
            running_distance_miles=round(totals.running_distance_miles, 2),
            workout_count=totals.workout_count,
        ),
        weekly=WeeklyResponse(
            week_start=summary.weekly.week_start,
            week_end=summary.weekly.week_end,
            climbed_meters=summary.weekly.climbed_meters,
            goal_meters=summary.weekly.goal_meters,
            percent=summary.weekly.percent,
            goal_reached=summary.weekly.goal_reached,
        ),
        unlocked_badges=[s.badge.id for s in summary.badges if s.unlocked],
        trophy_count=len(summary.trophies),
        active_challenges=[InstanceResponse.from_instance(i) for i in summary.active_challenges],
    )
