"""
Challenge Repository Interface (Port).

Challenge lists are stored per category: the active instances, and the
user's custom climbing and distance templates. Built-in templates are not
persisted.
"""
from enum import Enum
from typing import Protocol, List, Optional

from domain.models.challenge import ChallengeInstance, ChallengeKind, ChallengeTemplate


class ChallengeCategory(str, Enum):
    """Storage category of a challenge list."""

    ACTIVE = "active"
    CLIMBING = "climbing"
    DISTANCE = "distance"

    @classmethod
    def for_kind(cls, kind: ChallengeKind) -> "ChallengeCategory":
        """Category holding custom templates of ``kind``."""
        return cls.CLIMBING if kind is ChallengeKind.CLIMBING else cls.DISTANCE


class ChallengeRepository(Protocol):
    """
    Abstract interface for challenge list persistence.

    Lists are written whole; there is no per-item update. Reads return None
    when the store could not be queried and [] when nothing is stored.
    """

    def get_active(self, user_id: str) -> Optional[List[ChallengeInstance]]:
        """
        Get the user's active challenge instances.

        Returns:
            Instances in activation order, or None on failure
        """
        ...

    def save_active(self, user_id: str, instances: List[ChallengeInstance]) -> bool:
        """
        Replace the user's active challenge instances.

        Returns:
            True on success, False on failure
        """
        ...

    def get_custom_templates(self, user_id: str, kind: ChallengeKind) -> Optional[List[ChallengeTemplate]]:
        """
        Get the user's custom templates of one kind.

        Args:
            user_id: Authenticated user ID
            kind: Climbing or distance

        Returns:
            Templates in creation order, or None on failure
        """
        ...

    def save_custom_templates(
        self,
        user_id: str,
        kind: ChallengeKind,
        templates: List[ChallengeTemplate],
    ) -> bool:
        """
        Replace the user's custom templates of one kind.

        Returns:
            True on success, False on failure
        """
        ...
