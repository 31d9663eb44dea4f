"""
Achievement Repository Interface (Port).

Persists the set of unlocked badge ids and the trophy list.
"""
from typing import Protocol, List, Optional

from domain.models.achievement import Trophy


class AchievementRepository(Protocol):
    """
    Abstract interface for badge and trophy persistence.

    Both collections are written whole, so a read that fails returns None
    rather than an empty list.
    """

    def get_unlocked_badges(self, user_id: str) -> Optional[List[str]]:
        """
        Get ids of badges the user has unlocked.

        Returns:
            Badge ids in unlock order, or None on failure
        """
        ...

    def save_unlocked_badges(self, user_id: str, badge_ids: List[str]) -> bool:
        """
        Replace the unlocked badge ids.

        Returns:
            True on success, False on failure
        """
        ...

    def get_trophies(self, user_id: str) -> Optional[List[Trophy]]:
        """
        Get every trophy the user holds, including historical ones.

        Returns:
            Trophies, or None on failure
        """
        ...

    def save_trophies(self, user_id: str, trophies: List[Trophy]) -> bool:
        """
        Replace the trophy list.

        Returns:
            True on success, False on failure
        """
        ...
