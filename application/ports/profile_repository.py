"""
Profile Repository Interface (Port).

This module defines the abstract interface for user profile persistence:
rider weight, unit preferences, demographics, weekly goal and theme.
"""
from typing import Protocol, Optional

from domain.models.profile import UserProfile


class ProfileRepository(Protocol):
    """
    Abstract interface for profile storage.

    Implementations treat failures as "not yet persisted": they log and
    return None/False rather than raising.
    """

    def get(self, user_id: str) -> Optional[UserProfile]:
        """
        Get the user's profile.

        Args:
            user_id: Authenticated user ID

        Returns:
            UserProfile, or None if the user has none yet or the read failed
        """
        ...

    def save(self, user_id: str, profile: UserProfile) -> bool:
        """
        Create or replace the user's profile.

        Args:
            user_id: Authenticated user ID
            profile: Profile to store

        Returns:
            True on success, False on failure
        """
        ...
