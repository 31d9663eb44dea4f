"""
Workout Repository Interface (Port).

This module defines the abstract interface for workout persistence operations.
Implementations may use Supabase, in-memory storage, or other backends.
"""
from typing import Protocol, Optional, List

from domain.models.workout import Workout


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout persistence operations.

    The store owns workout ids: ``add`` assigns one, and the caller swaps its
    provisional id for it. Domain types are used instead of database-specific
    types to maintain clean architecture boundaries.
    """

    def add(self, user_id: str, workout: Workout) -> Optional[str]:
        """
        Persist a new workout.

        Any id carried by ``workout`` (including a provisional one) is ignored.

        Args:
            user_id: Authenticated user ID
            workout: Workout to store

        Returns:
            Persisted workout id, or None on failure
        """
        ...

    def get_list(self, user_id: str) -> Optional[List[Workout]]:
        """
        Get every workout for a user.

        Args:
            user_id: Authenticated user ID

        Returns:
            Workouts ordered by date descending, or None when the
            query failed (unreadable rows are skipped, not fatal)
        """
        ...

    def update(self, user_id: str, workout: Workout) -> bool:
        """
        Replace the stored fields of an existing workout.

        Args:
            user_id: Authenticated user ID
            workout: Workout carrying its persisted id

        Returns:
            True if updated, False if not found or on failure
        """
        ...

    def delete(self, user_id: str, workout_id: str) -> bool:
        """
        Delete a workout.

        Args:
            user_id: Authenticated user ID
            workout_id: Persisted workout id

        Returns:
            True if deleted, False if not found or on failure
        """
        ...
