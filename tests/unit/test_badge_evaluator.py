"""
Unit tests for backend/core/badge_evaluator.py and the badge catalog.
"""
import random

import pytest

from backend.core.badge_evaluator import badge_statuses, check_and_unlock, merge_unlocked
from backend.core.catalog import badge_catalog
from backend.core.physics import calculate_elevation

pytestmark = pytest.mark.unit


class TestCatalog:
    def test_thresholds_ascending(self):
        thresholds = [b.threshold for b in badge_catalog()]
        assert thresholds == sorted(thresholds)
        assert [b.id for b in badge_catalog()] == [
            "first-ride",
            "eiffel",
            "mont-blanc",
            "kilimanjaro",
            "k2",
            "everest",
        ]


class TestCheckAndUnlock:
    def test_first_workout_scenario(self):
        """400 kJ at 80 kg unlocks first-ride but not eiffel."""
        cumulative = calculate_elevation(400, 80).meters
        unlocked = [b.id for b in check_and_unlock(cumulative, [])]
        assert unlocked == ["first-ride"]

    def test_skips_already_unlocked(self):
        unlocked = check_and_unlock(400, ["first-ride"])
        assert [b.id for b in unlocked] == ["eiffel"]

    def test_everything_at_everest(self):
        assert len(check_and_unlock(9000, [])) == len(badge_catalog())

    def test_threshold_is_inclusive(self):
        assert [b.id for b in check_and_unlock(10, [])] == ["first-ride"]
        assert check_and_unlock(9.99, []) == []

    @pytest.mark.parametrize("seed", range(5))
    def test_unlocked_set_never_shrinks(self, seed):
        """Totals moving up and down never remove an unlocked badge."""
        rng = random.Random(seed)
        unlocked: list = []
        for _ in range(40):
            before = set(unlocked)
            total = rng.uniform(0, 10000)
            unlocked = merge_unlocked(unlocked, check_and_unlock(total, unlocked))
            assert before <= set(unlocked)
            assert len(unlocked) == len(set(unlocked))


class TestMergeAndStatus:
    def test_merge_preserves_order(self):
        new = check_and_unlock(400, ["eiffel"])
        assert merge_unlocked(["eiffel"], new) == ["eiffel", "first-ride"]

    def test_statuses_flag_unlocked(self):
        statuses = {s.badge.id: s.unlocked for s in badge_statuses(["eiffel"])}
        assert statuses["eiffel"] is True
        assert statuses["first-ride"] is False
        assert len(statuses) == len(badge_catalog())
