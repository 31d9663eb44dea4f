"""
Supabase implementation of ProfileRepository.

One row per user in the ``profiles`` table, keyed by ``id``.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from domain.converters import profile_from_record, profile_to_record
from domain.models import UserProfile

logger = logging.getLogger(__name__)

TABLE = "profiles"


class SupabaseProfileRepository:
    """Supabase implementation of ProfileRepository protocol."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, user_id: str) -> Optional[UserProfile]:
        try:
            result = self._client.table(TABLE).select("*").eq("id", user_id).limit(1).execute()
            if result.data and len(result.data) > 0:
                return profile_from_record(result.data[0])
            return None
        except Exception as e:
            logger.error(f"Failed to get profile {user_id}: {e}")
            return None

    def save(self, user_id: str, profile: UserProfile) -> bool:
        try:
            data = {
                "id": user_id,
                **profile_to_record(profile),
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
            result = self._client.table(TABLE).upsert(data, on_conflict="id").execute()
            if result.data and len(result.data) > 0:
                logger.info(f"Profile saved for {user_id}")
                return True
            return False
        except Exception as e:
            logger.error(f"Failed to save profile {user_id}: {e}")
            return False
