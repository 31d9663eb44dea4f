"""
Challenges router.

Endpoints:
- GET/POST /challenges/templates: built-in and custom templates
- GET/POST /challenges/active: active instances / activate a template
- POST /challenges/active/{instance_id}/contributions: credit selected workouts
- DELETE /challenges/active/{instance_id}: remove an instance (trophies kept)
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from api.deps import get_manage_challenges_use_case, get_progress_state
from application.use_cases import ManageChallengesUseCase
from domain.models import ChallengeInstance, ChallengeKind, ChallengeTemplate, ProgressState

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/challenges",
    tags=["Challenges"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateTemplateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    kind: ChallengeKind
    target: float = Field(gt=0, description="Meters for climbing, kilometers for distance")


class TemplateListResponse(BaseModel):
    templates: List[ChallengeTemplate]
    count: int


class ActivateRequest(BaseModel):
    template_id: str


class ContributeRequest(BaseModel):
    workout_ids: List[str] = Field(min_length=1)


class InstanceResponse(BaseModel):
    """Active instance with its derived progress."""
    instance_id: str
    template_id: str
    title: str
    kind: ChallengeKind
    unit: str
    target: float
    progress: float
    percent_complete: float
    remaining: float
    is_complete: bool
    workout_ids: List[str]
    activated_at: datetime

    @classmethod
    def from_instance(cls, instance: ChallengeInstance) -> "InstanceResponse":
        return cls(
            instance_id=instance.instance_id,
            template_id=instance.template_id,
            title=instance.title,
            kind=instance.kind,
            unit=instance.kind.unit,
            target=instance.target,
            progress=round(instance.progress, 2),
            percent_complete=instance.percent_complete,
            remaining=round(instance.remaining, 2),
            is_complete=instance.is_complete,
            workout_ids=instance.workout_ids,
            activated_at=instance.activated_at,
        )


class InstanceListResponse(BaseModel):
    instances: List[InstanceResponse]
    count: int


class ContributeResponse(BaseModel):
    instance: InstanceResponse
    applied: List[str]
    skipped: List[str]
    awarded_trophies: List[str]
    persisted: bool


class MutationResponse(BaseModel):
    persisted: bool
    message: Optional[str] = None


# =============================================================================
# Templates
# =============================================================================


@router.get("/templates", response_model=TemplateListResponse)
def list_templates(
    kind: Optional[ChallengeKind] = Query(None, description="Filter by climbing or distance"),
    state: ProgressState = Depends(get_progress_state),
    use_case: ManageChallengesUseCase = Depends(get_manage_challenges_use_case),
):
    """Built-in templates followed by the user's custom templates."""
    templates = use_case.list_templates(state, kind)
    return TemplateListResponse(templates=templates, count=len(templates))


@router.post("/templates", response_model=ChallengeTemplate, status_code=status.HTTP_201_CREATED)
def create_template(
    request: CreateTemplateRequest,
    state: ProgressState = Depends(get_progress_state),
    use_case: ManageChallengesUseCase = Depends(get_manage_challenges_use_case),
):
    """Create a custom challenge template."""
    result = use_case.create_template(state, request.title, request.kind, request.target)
    if not result.success:
        raise HTTPException(status_code=422, detail=result.error)
    if not result.persisted:
        logger.warning(f"Custom template {result.template.id} created but not persisted")
    return result.template


# =============================================================================
# Active instances
# =============================================================================


@router.get("/active", response_model=InstanceListResponse)
def list_active(state: ProgressState = Depends(get_progress_state)):
    """Active challenge instances with progress."""
    instances = [InstanceResponse.from_instance(i) for i in state.active_challenges]
    return InstanceListResponse(instances=instances, count=len(instances))


@router.post("/active", response_model=InstanceResponse, status_code=status.HTTP_201_CREATED)
def activate(
    request: ActivateRequest,
    state: ProgressState = Depends(get_progress_state),
    use_case: ManageChallengesUseCase = Depends(get_manage_challenges_use_case),
):
    """Start a fresh attempt at a template."""
    result = use_case.activate(state, request.template_id)
    if result.not_found:
        raise HTTPException(status_code=404, detail=result.error)
    return InstanceResponse.from_instance(result.instance)


@router.post("/active/{instance_id}/contributions", response_model=ContributeResponse)
def contribute(
    instance_id: str,
    request: ContributeRequest,
    state: ProgressState = Depends(get_progress_state),
    use_case: ManageChallengesUseCase = Depends(get_manage_challenges_use_case),
):
    """Credit workouts to an instance; already-credited workouts are skipped."""
    result = use_case.contribute(state, instance_id, request.workout_ids)
    if result.not_found:
        raise HTTPException(status_code=404, detail=result.error)
    return ContributeResponse(
        instance=InstanceResponse.from_instance(result.instance),
        applied=result.applied,
        skipped=result.skipped,
        awarded_trophies=[t.title for t in result.awarded],
        persisted=result.persisted,
    )


@router.delete("/active/{instance_id}", response_model=MutationResponse)
def remove(
    instance_id: str,
    state: ProgressState = Depends(get_progress_state),
    use_case: ManageChallengesUseCase = Depends(get_manage_challenges_use_case),
):
    """Remove an instance. A trophy it earned stays as history."""
    result = use_case.remove(state, instance_id)
    if result.not_found:
        raise HTTPException(status_code=404, detail=result.error)
    return MutationResponse(
        persisted=result.persisted,
        message=None if result.persisted else "Removed locally but not yet persisted",
    )
