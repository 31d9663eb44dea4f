"""
Supabase implementations backed by the ``app_data`` key/value table.

Each row holds one JSONB document per (``profile_id``, ``key``):

- ``challenges_my``: {"list": [active instances]}
- ``challenges_climbing``: {"list": [custom climbing templates]}
- ``challenges_distance``: {"list": [custom distance templates]}
- ``badges``: {"unlocked": [badge ids]}
- ``trophies``: {"list": [trophies]}

Unreadable entries inside a list are skipped with a warning rather than
failing the whole read. A failed query reads as None, never as an empty
list, so a later whole-list write cannot replace data that was never read.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

from supabase import Client

from application.ports.challenge_repository import ChallengeCategory
from domain.converters import (
    instance_from_record,
    instance_to_record,
    template_from_record,
    template_to_record,
    trophy_from_record,
    trophy_to_record,
)
from domain.models import ChallengeInstance, ChallengeKind, ChallengeTemplate, Trophy

logger = logging.getLogger(__name__)

TABLE = "app_data"

CHALLENGE_KEYS = {
    ChallengeCategory.ACTIVE: "challenges_my",
    ChallengeCategory.CLIMBING: "challenges_climbing",
    ChallengeCategory.DISTANCE: "challenges_distance",
}
BADGES_KEY = "badges"
TROPHIES_KEY = "trophies"

T = TypeVar("T")


class _AppDataStore:
    """Read and write single JSONB documents in ``app_data``."""

    def __init__(self, client: Client):
        self._client = client

    def _read(self, user_id: str, key: str) -> Optional[Dict[str, Any]]:
        """The stored document, {} when the key has none, None when the query fails."""
        try:
            result = (
                self._client.table(TABLE)
                .select("value")
                .eq("profile_id", user_id)
                .eq("key", key)
                .limit(1)
                .execute()
            )
            if result.data and len(result.data) > 0:
                return result.data[0].get("value") or {}
            return {}
        except Exception as e:
            logger.error(f"Failed to read app_data {key} for {user_id}: {e}")
            return None

    def _write(self, user_id: str, key: str, value: Dict[str, Any]) -> bool:
        try:
            data = {
                "profile_id": user_id,
                "key": key,
                "value": value,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
            result = self._client.table(TABLE).upsert(data, on_conflict="profile_id,key").execute()
            return bool(result.data and len(result.data) > 0)
        except Exception as e:
            logger.error(f"Failed to write app_data {key} for {user_id}: {e}")
            return False

    def _read_list(
        self,
        user_id: str,
        key: str,
        field: str,
        parse: Callable[[Dict[str, Any]], T],
    ) -> Optional[List[T]]:
        document = self._read(user_id, key)
        if document is None:
            return None
        entries = document if isinstance(document, list) else document.get(field) or []
        items: List[T] = []
        for raw in entries:
            try:
                items.append(parse(raw))
            except (ValueError, TypeError, KeyError) as e:
                logger.warning(f"Skipping unreadable {key} entry for {user_id}: {e}")
        return items


class SupabaseChallengeRepository(_AppDataStore):
    """Supabase implementation of ChallengeRepository protocol."""

    def get_active(self, user_id: str) -> Optional[List[ChallengeInstance]]:
        return self._read_list(user_id, CHALLENGE_KEYS[ChallengeCategory.ACTIVE], "list", instance_from_record)

    def save_active(self, user_id: str, instances: List[ChallengeInstance]) -> bool:
        value = {"list": [instance_to_record(i) for i in instances]}
        return self._write(user_id, CHALLENGE_KEYS[ChallengeCategory.ACTIVE], value)

    def get_custom_templates(self, user_id: str, kind: ChallengeKind) -> Optional[List[ChallengeTemplate]]:
        key = CHALLENGE_KEYS[ChallengeCategory.for_kind(kind)]
        return self._read_list(
            user_id,
            key,
            "list",
            lambda raw: template_from_record(raw, kind=kind, is_custom=True),
        )

    def save_custom_templates(
        self,
        user_id: str,
        kind: ChallengeKind,
        templates: List[ChallengeTemplate],
    ) -> bool:
        key = CHALLENGE_KEYS[ChallengeCategory.for_kind(kind)]
        return self._write(user_id, key, {"list": [template_to_record(t) for t in templates]})


class SupabaseAchievementRepository(_AppDataStore):
    """Supabase implementation of AchievementRepository protocol."""

    def get_unlocked_badges(self, user_id: str) -> Optional[List[str]]:
        document = self._read(user_id, BADGES_KEY)
        if document is None:
            return None
        unlocked = document if isinstance(document, list) else document.get("unlocked") or []
        return [str(badge_id) for badge_id in unlocked]

    def save_unlocked_badges(self, user_id: str, badge_ids: List[str]) -> bool:
        return self._write(user_id, BADGES_KEY, {"unlocked": list(badge_ids)})

    def get_trophies(self, user_id: str) -> Optional[List[Trophy]]:
        return self._read_list(user_id, TROPHIES_KEY, "list", trophy_from_record)

    def save_trophies(self, user_id: str, trophies: List[Trophy]) -> bool:
        return self._write(user_id, TROPHIES_KEY, {"list": [trophy_to_record(t) for t in trophies]})
