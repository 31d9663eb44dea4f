"""
Trophies and badges.

Trophies mark the completion of a specific challenge instance. Badges are
lifetime elevation milestones, independent of any challenge.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from domain.models.challenge import ChallengeKind


class Trophy(BaseModel):
    """
    Permanent record of a completed challenge instance.

    ``instance_id`` and ``template_id`` are nullable because trophies written
    before instances existed only carried a title.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    instance_id: Optional[str] = None
    template_id: Optional[str] = None
    title: str
    kind: Optional[ChallengeKind] = None
    earned_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_legacy(self) -> bool:
        """True for records that predate instance back-references."""
        return self.instance_id is None


class Badge(BaseModel):
    """Lifetime climbing milestone from the fixed catalog."""

    id: str
    threshold: float = Field(..., gt=0, description="Cumulative meters required")
    name: str

    model_config = {"frozen": True}
