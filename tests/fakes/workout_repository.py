"""
Fake Workout Repository for testing.

In-memory implementation of WorkoutRepository for fast, isolated tests
without database dependencies.
"""
from typing import Dict, List, Optional
import uuid

from domain.models import Workout


class FakeWorkoutRepository:
    """
    In-memory fake implementation of WorkoutRepository for testing.

    Stores workouts per user keyed by id. ``fail_writes`` makes every write
    report failure and ``fail_reads`` makes ``get_list`` report an
    unreachable store.

    Usage:
        repo = FakeWorkoutRepository()
        repo.seed("user1", [workout])
        workout_id = repo.add("user1", workout)
    """

    def __init__(self, *, fail_writes: bool = False, fail_reads: bool = False):
        """Initialize with empty storage."""
        self._workouts: Dict[str, Dict[str, Workout]] = {}
        self.fail_writes = fail_writes
        self.fail_reads = fail_reads
        self.calls: List[str] = []

    def reset(self) -> None:
        """Clear all stored workouts."""
        self._workouts.clear()
        self.calls.clear()

    def seed(self, user_id: str, workouts: List[Workout]) -> None:
        """Seed the repository; workouts without an id get one."""
        store = self._workouts.setdefault(user_id, {})
        for workout in workouts:
            workout_id = workout.id or str(uuid.uuid4())
            store[workout_id] = workout.with_id(workout_id)

    def get_all(self, user_id: str) -> List[Workout]:
        """Get all stored workouts for a user (test helper)."""
        return list(self._workouts.get(user_id, {}).values())

    # =========================================================================
    # WorkoutRepository Protocol Methods
    # =========================================================================

    def add(self, user_id: str, workout: Workout) -> Optional[str]:
        self.calls.append("add")
        if self.fail_writes:
            return None
        workout_id = str(uuid.uuid4())
        self._workouts.setdefault(user_id, {})[workout_id] = workout.with_id(workout_id)
        return workout_id

    def get_list(self, user_id: str) -> Optional[List[Workout]]:
        self.calls.append("get_list")
        if self.fail_reads:
            return None
        workouts = list(self._workouts.get(user_id, {}).values())
        return sorted(workouts, key=lambda w: w.date, reverse=True)

    def update(self, user_id: str, workout: Workout) -> bool:
        self.calls.append("update")
        store = self._workouts.get(user_id, {})
        if self.fail_writes or workout.id not in store:
            return False
        store[workout.id] = workout
        return True

    def delete(self, user_id: str, workout_id: str) -> bool:
        self.calls.append("delete")
        store = self._workouts.get(user_id, {})
        if self.fail_writes or workout_id not in store:
            return False
        del store[workout_id]
        return True
