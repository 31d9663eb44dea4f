"""
Supabase implementation of WorkoutRepository.

Workouts live in the ``workouts`` table: one row per workout with
``profile_id``, ``workout_date`` and the full record in ``workout_data``
(JSONB). The row id is authoritative and overrides any id stored inside
the data.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from supabase import Client

from domain.converters import workout_from_record, workout_to_record
from domain.models import Workout

logger = logging.getLogger(__name__)

TABLE = "workouts"


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    All Supabase query logic for workouts is encapsulated here.
    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def add(self, user_id: str, workout: Workout) -> Optional[str]:
        """Insert a workout and return the id Supabase assigned."""
        try:
            data = {
                "profile_id": user_id,
                "workout_date": workout.date.isoformat(),
                "workout_data": workout_to_record(workout),
            }
            result = self._client.table(TABLE).insert(data).execute()

            if result.data and len(result.data) > 0:
                workout_id = str(result.data[0]["id"])
                logger.info(f"Workout saved for profile {user_id}, id: {workout_id}")
                return workout_id
            return None
        except Exception as e:
            error_msg = str(e)
            logger.error(f"Failed to save workout: {e}")
            if "PGRST" in error_msg or "permission" in error_msg.lower() or "row-level security" in error_msg.lower():
                logger.error("RLS/Permissions error: Consider using SUPABASE_SERVICE_ROLE_KEY instead of SUPABASE_ANON_KEY for backend API")
            return None

    def get_list(self, user_id: str) -> Optional[List[Workout]]:
        """
        Get every workout for a user, newest first.

        Unreadable rows are skipped. Returns None when the query itself
        fails so callers never mistake an outage for an empty history.
        """
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("profile_id", user_id)
                .order("workout_date", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get workouts for {user_id}: {e}")
            return None

        workouts: List[Workout] = []
        for row in result.data or []:
            try:
                workouts.append(workout_from_record(_row_to_record(row)))
            except (ValueError, TypeError, KeyError) as e:
                logger.warning(f"Skipping unreadable workout row {row.get('id')}: {e}")
        return workouts

    def update(self, user_id: str, workout: Workout) -> bool:
        """Replace a workout's stored data."""
        if not workout.id:
            return False
        try:
            data = {
                "workout_date": workout.date.isoformat(),
                "workout_data": workout_to_record(workout),
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
            result = (
                self._client.table(TABLE)
                .update(data)
                .eq("id", workout.id)
                .eq("profile_id", user_id)
                .execute()
            )
            return bool(result.data and len(result.data) > 0)
        except Exception as e:
            logger.error(f"Failed to update workout {workout.id}: {e}")
            return False

    def delete(self, user_id: str, workout_id: str) -> bool:
        """Delete a workout."""
        try:
            result = (
                self._client.table(TABLE)
                .delete()
                .eq("id", workout_id)
                .eq("profile_id", user_id)
                .execute()
            )
            return bool(result.data and len(result.data) > 0)
        except Exception as e:
            logger.error(f"Failed to delete workout {workout_id}: {e}")
            return False


def _row_to_record(row: Dict[str, Any]) -> Dict[str, Any]:
    record = dict(row.get("workout_data") or {})
    record["id"] = str(row["id"])
    if not record.get("date") and row.get("workout_date"):
        record["date"] = row["workout_date"]
    if not record.get("created_at") and row.get("created_at"):
        record["created_at"] = row["created_at"]
    return record
