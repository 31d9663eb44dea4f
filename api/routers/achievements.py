"""
Achievements router for badges and trophies.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_progress_state
from backend.core.badge_evaluator import badge_statuses
from domain.models import ChallengeKind, ProgressState, Trophy

router = APIRouter(
    prefix="/achievements",
    tags=["Achievements"],
)


class BadgeResponse(BaseModel):
    id: str
    name: str
    threshold: float
    unlocked: bool


class BadgeListResponse(BaseModel):
    badges: List[BadgeResponse]
    unlocked_count: int


class TrophyResponse(BaseModel):
    id: str
    title: str
    kind: Optional[ChallengeKind] = None
    instance_id: Optional[str] = None
    template_id: Optional[str] = None
    earned_at: datetime
    # Instance removed or predates instance tracking
    historical: bool

    @classmethod
    def from_trophy(cls, trophy: Trophy, active_ids: set) -> "TrophyResponse":
        return cls(
            id=trophy.id,
            title=trophy.title,
            kind=trophy.kind,
            instance_id=trophy.instance_id,
            template_id=trophy.template_id,
            earned_at=trophy.earned_at,
            historical=trophy.instance_id not in active_ids,
        )


class TrophyListResponse(BaseModel):
    trophies: List[TrophyResponse]
    count: int


@router.get("/badges", response_model=BadgeListResponse)
def list_badges(state: ProgressState = Depends(get_progress_state)):
    """Every badge with its unlock flag."""
    statuses = badge_statuses(state.unlocked_badges)
    badges = [
        BadgeResponse(id=s.badge.id, name=s.badge.name, threshold=s.badge.threshold, unlocked=s.unlocked)
        for s in statuses
    ]
    return BadgeListResponse(badges=badges, unlocked_count=sum(1 for b in badges if b.unlocked))


@router.get("/trophies", response_model=TrophyListResponse)
def list_trophies(state: ProgressState = Depends(get_progress_state)):
    """Trophies newest first, including those of removed instances."""
    active_ids = {i.instance_id for i in state.active_challenges}
    trophies = sorted(state.trophies, key=lambda t: t.earned_at, reverse=True)
    return TrophyListResponse(
        trophies=[TrophyResponse.from_trophy(t, active_ids) for t in trophies],
        count=len(trophies),
    )
