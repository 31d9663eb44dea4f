"""
Unit tests for backend/core/physics.py

Tests for:
- Energy to elevation conversion and its zero state
- Half-up rounding
- Landmark comparison text
"""
import math
import random

import pytest

from backend.core.physics import (
    ZERO_ELEVATION,
    ZERO_STATE_TEXT,
    calculate_elevation,
    format_fixed,
    height_meters,
    landmark_text,
    round_half_up,
)
from domain.models.units import feet_to_meters, meters_to_feet

pytestmark = pytest.mark.unit


# =============================================================================
# calculate_elevation
# =============================================================================


class TestCalculateElevation:
    def test_reference_values(self):
        """400 kJ for an 80 kg rider plus the 61 kg bike."""
        result = calculate_elevation(400, 80)
        assert result.meters == pytest.approx(289.47, abs=0.1)
        assert result.feet == pytest.approx(949.75, abs=0.5)
        assert result.landmark_text == "You are 87.7% of the way up the Eiffel Tower!"

    def test_values_are_rounded_to_two_decimals(self):
        result = calculate_elevation(400, 80)
        assert result.meters == 289.48
        assert round(result.meters, 2) == result.meters
        assert round(result.feet, 2) == result.feet

    @pytest.mark.parametrize(
        "energy_kj,mass_kg",
        [
            (0, 80),
            (400, 0),
            (-10, 80),
            (400, -80),
            (None, 80),
            (400, None),
            ("abc", 80),
            (float("nan"), 80),
            (float("inf"), 80),
        ],
    )
    def test_invalid_inputs_give_zero_state(self, energy_kj, mass_kg):
        assert calculate_elevation(energy_kj, mass_kg) == ZERO_ELEVATION
        assert calculate_elevation(energy_kj, mass_kg).landmark_text == ZERO_STATE_TEXT

    @pytest.mark.parametrize("seed", range(5))
    def test_monotonic_in_energy(self, seed):
        rng = random.Random(seed)
        mass = rng.uniform(40, 120)
        energies = sorted(rng.uniform(1, 5000) for _ in range(20))
        heights = [calculate_elevation(e, mass).meters for e in energies]
        assert heights == sorted(heights)

    @pytest.mark.parametrize("seed", range(5))
    def test_heavier_rider_climbs_less(self, seed):
        rng = random.Random(seed)
        energy = rng.uniform(1, 5000)
        light, heavy = sorted(rng.uniform(40, 120) for _ in range(2))
        assert height_meters(energy, heavy) <= height_meters(energy, light)

    def test_feet_and_meters_agree(self):
        result = calculate_elevation(1200, 70)
        assert feet_to_meters(result.feet) == pytest.approx(result.meters, rel=1e-3)


# =============================================================================
# Rounding
# =============================================================================


class TestRounding:
    @pytest.mark.parametrize(
        "value,digits,expected",
        [
            (2.5, 0, 3.0),
            (3.5, 0, 4.0),
            (0.125, 2, 0.13),
            (289.4736842, 2, 289.47),
            (-2.5, 0, -3.0),
        ],
    )
    def test_round_half_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected

    def test_format_fixed_keeps_trailing_zeros(self):
        assert format_fixed(56.0, 1) == "56.0"
        assert format_fixed(24.5, 0) == "25"


# =============================================================================
# Landmark text
# =============================================================================


class TestLandmarkText:
    @pytest.mark.parametrize(
        "meters,expected",
        [
            (72.37, "That's about 24 stories high!"),
            (0.5, "That's about 0 stories high!"),
            (150, "You are 45.5% of the way up the Eiffel Tower!"),
            (400, "You just climbed the Eiffel Tower!"),
            (700, "You just climbed the Empire State Building!"),
            (1000, "You just climbed the Burj Khalifa!"),
            (5000, "You are 56.5% of the way up the Mount Everest!"),
            (10000, "You just climbed the Mount Everest!"),
            (20000, "You climbed the equivalent of Mount Everest 2.3 times!"),
        ],
    )
    def test_text_by_height(self, meters, expected):
        assert landmark_text(meters) == expected


# =============================================================================
# Units
# =============================================================================


class TestUnitRoundTrip:
    @pytest.mark.parametrize("seed", range(3))
    def test_meters_feet_meters(self, seed):
        rng = random.Random(seed)
        for _ in range(50):
            meters = rng.uniform(0, 10000)
            assert math.isclose(feet_to_meters(meters_to_feet(meters)), meters, rel_tol=1e-6, abs_tol=1e-9)
