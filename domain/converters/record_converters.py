"""
Converters: persistence records <-> domain models.

Records are plain dicts as stored by the persistence collaborator. Current
records use snake_case keys; records written by earlier clients use
camelCase keys and flat optional metric fields (``energyKj``,
``distanceMiles``, ``metricType``). Both layouts are accepted on read, and
the current layout is always written.

All converters are pure functions apart from logging.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional

from domain.models.achievement import Trophy
from domain.models.challenge import ChallengeInstance, ChallengeKind, ChallengeTemplate, Contribution
from domain.models.profile import UserProfile
from domain.models.workout import DistanceMetric, EnergyMetric, Workout

logger = logging.getLogger(__name__)

# Stored progress may differ from the recomputed sum by float noise only
PROGRESS_TOLERANCE = 0.01

_WORKOUT_OPTIONAL_FIELDS = {
    "cadence": ("cadence",),
    "speed": ("speed",),
    "resistance": ("resistance",),
    "elevation_ft": ("elevation_ft", "elevationFt", "elevation"),
    "pace": ("pace",),
    "heart_rate": ("heart_rate", "heartRate"),
    "intensity": ("intensity",),
    "calories": ("calories",),
    "notes": ("notes",),
}


def _pick(record: Dict[str, Any], *keys: str) -> Any:
    """Return the first non-empty value among ``keys``."""
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from ISO strings (with or without Z suffix)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        return date.fromisoformat(value[:10])
    raise ValueError(f"Workout record has no usable date: {value!r}")


# =============================================================================
# Workouts
# =============================================================================


def _tagged_value(metric: Dict[str, Any], field: str) -> float:
    value = metric.get(field)
    if value is None:
        raise ValueError(f"{metric.get('kind')} metric is missing '{field}'")
    return float(value)


def _metric_from_record(record: Dict[str, Any]):
    metric = record.get("metric")
    if isinstance(metric, dict):
        if metric.get("kind") == "energy":
            return EnergyMetric(kj=_tagged_value(metric, "kj"))
        if metric.get("kind") == "distance":
            return DistanceMetric(miles=_tagged_value(metric, "miles"))

    energy = _pick(record, "energy_kj", "energyKj")
    distance = _pick(record, "distance_miles", "distanceMiles")
    metric_type = _pick(record, "metric_type", "metricType")

    if metric_type in ("energy", "kj") and energy is not None:
        return EnergyMetric(kj=float(energy))
    if metric_type == "distance" and distance is not None:
        return DistanceMetric(miles=float(distance))

    # Untagged legacy record: infer once, here at the boundary
    if energy is not None:
        return EnergyMetric(kj=float(energy))
    if distance is not None:
        return DistanceMetric(miles=float(distance))

    raise ValueError("Workout record needs an energy or distance value")


def workout_from_record(record: Dict[str, Any]) -> Workout:
    """
    Build a Workout from a stored record.

    Raises:
        ValueError: if the record has neither energy nor distance, or no date.
    """
    data: Dict[str, Any] = {
        "id": _pick(record, "id"),
        "date": _parse_date(_pick(record, "date", "workout_date")),
        "type": _pick(record, "type", "activity_type") or "bike",
        "duration_minutes": _pick(record, "duration_minutes", "durationMinutes", "duration"),
        "metric": _metric_from_record(record),
        "created_at": _parse_datetime(_pick(record, "created_at", "createdAt")),
    }
    for field_name, keys in _WORKOUT_OPTIONAL_FIELDS.items():
        data[field_name] = _pick(record, *keys)

    if data["id"] is not None:
        data["id"] = str(data["id"])
    if data["pace"] is not None:
        data["pace"] = str(data["pace"])
    return Workout.model_validate(data)


def workout_to_record(workout: Workout) -> Dict[str, Any]:
    """Serialize a Workout for persistence (id excluded, the store owns it)."""
    record = workout.model_dump(mode="json", exclude={"id"}, exclude_none=True)
    return record


# =============================================================================
# Challenges
# =============================================================================


def template_from_record(
    record: Dict[str, Any],
    *,
    kind: Optional[ChallengeKind] = None,
    is_custom: bool = True,
) -> ChallengeTemplate:
    """Build a ChallengeTemplate; ``kind`` fills in for records stored per category."""
    record_kind = _pick(record, "kind", "type") or (kind.value if kind else None)
    target = _pick(record, "target", "targetHeightMeters", "target_height_m", "targetDistanceKm", "target_distance_km")
    return ChallengeTemplate(
        id=str(_pick(record, "id", "template_id", "templateId")),
        title=_pick(record, "title", "name"),
        kind=ChallengeKind(record_kind),
        target=float(target),
        is_custom=bool(record.get("is_custom", is_custom)),
    )


def template_to_record(template: ChallengeTemplate) -> Dict[str, Any]:
    return template.model_dump(mode="json")


def instance_from_record(record: Dict[str, Any]) -> ChallengeInstance:
    """
    Build a ChallengeInstance, repairing stored progress if it drifted.

    Progress is derived from contributions, so a stored ``progress`` value
    that disagrees with their sum is reported and dropped.
    """
    contributions = [
        Contribution(
            workout_id=str(_pick(c, "workout_id", "workoutId")),
            amount=float(c.get("amount", 0)),
            applied_at=_parse_datetime(_pick(c, "applied_at", "appliedAt")) or datetime.fromtimestamp(0).astimezone(),
        )
        for c in record.get("contributions") or []
    ]

    data: Dict[str, Any] = {
        "template_id": str(_pick(record, "template_id", "templateId", "id")),
        "title": _pick(record, "title", "name"),
        "kind": ChallengeKind(_pick(record, "kind", "type")),
        "target": float(_pick(record, "target", "targetHeightMeters", "targetDistanceKm")),
        "contributions": contributions,
    }
    instance_id = _pick(record, "instance_id", "instanceId")
    if instance_id is not None:
        data["instance_id"] = str(instance_id)
    activated_at = _parse_datetime(_pick(record, "activated_at", "activatedAt"))
    if activated_at is not None:
        data["activated_at"] = activated_at

    instance = ChallengeInstance.model_validate(data)

    stored = record.get("progress")
    if stored is not None and abs(float(stored) - instance.progress) > PROGRESS_TOLERANCE:
        logger.warning(
            f"Challenge instance {instance.instance_id} stored progress {stored} "
            f"disagrees with contributions ({instance.progress:.2f}); recomputed from contributions"
        )
    return instance


def instance_to_record(instance: ChallengeInstance) -> Dict[str, Any]:
    return instance.model_dump(mode="json")


# =============================================================================
# Trophies and profile
# =============================================================================


def trophy_from_record(record: Dict[str, Any]) -> Trophy:
    data: Dict[str, Any] = {
        "instance_id": _pick(record, "instance_id", "instanceId"),
        "template_id": _pick(record, "template_id", "templateId", "challengeId"),
        "title": _pick(record, "title", "name"),
    }
    if record.get("id") is not None:
        data["id"] = str(record["id"])
    kind = _pick(record, "kind", "type")
    if kind in (ChallengeKind.CLIMBING.value, ChallengeKind.DISTANCE.value):
        data["kind"] = ChallengeKind(kind)
    earned_at = _parse_datetime(_pick(record, "earned_at", "earnedAt", "date"))
    if earned_at is not None:
        data["earned_at"] = earned_at
    return Trophy.model_validate(data)


def trophy_to_record(trophy: Trophy) -> Dict[str, Any]:
    return trophy.model_dump(mode="json")


def profile_from_record(record: Optional[Dict[str, Any]]) -> UserProfile:
    """Build a UserProfile; missing or legacy string values fall back to defaults."""
    if not record:
        return UserProfile()

    data: Dict[str, Any] = {}
    weight = _pick(record, "weight")
    if weight is not None:
        data["weight"] = float(weight)
    goal = _pick(record, "weekly_goal", "goal")
    if goal is not None:
        data["weekly_goal"] = float(goal)
    weight_unit = _pick(record, "weight_unit", "unit_weight")
    if weight_unit is not None:
        data["weight_unit"] = weight_unit
    distance_unit = _pick(record, "distance_unit", "unit_distance")
    if distance_unit is not None:
        data["distance_unit"] = distance_unit
    for key in ("age", "gender", "height_cm", "theme"):
        if record.get(key) is not None:
            data[key] = record[key]
    return UserProfile.model_validate(data)


def profile_to_record(profile: UserProfile) -> Dict[str, Any]:
    return profile.model_dump(mode="json")
