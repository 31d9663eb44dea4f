"""
EstimateEnergy Use Case.

Auto-estimates workout energy from the user's profile and workout
descriptors. Refuses to estimate while any prerequisite is missing, so the
caller can ask for exactly those fields instead of silently defaulting.
"""

import logging

from application.exceptions import MissingPrerequisiteError
from backend.core.calorie_estimator import (
    CalorieEstimate,
    EstimatorProfile,
    EstimatorWorkout,
    estimate_calories,
    missing_estimation_fields,
)
from domain.models import UserProfile

logger = logging.getLogger(__name__)


def estimator_profile(profile: UserProfile) -> EstimatorProfile:
    """Project the stored profile onto the estimator inputs."""
    return EstimatorProfile(
        age_years=profile.age,
        gender=profile.gender,
        weight=profile.weight,
        weight_unit=profile.weight_unit,
        height_cm=profile.height_cm,
    )


class EstimateEnergyUseCase:
    """Use case for energy estimation from profile and workout descriptors."""

    def execute(self, profile: UserProfile, workout: EstimatorWorkout) -> CalorieEstimate:
        """
        Estimate calories and kilojoules.

        Raises:
            MissingPrerequisiteError: listing each missing profile/workout field
        """
        inputs = estimator_profile(profile)
        missing = missing_estimation_fields(inputs, workout)
        if missing:
            logger.info(f"Energy estimate refused, missing fields: {missing}")
            raise MissingPrerequisiteError(missing)

        estimate = estimate_calories(inputs, workout)
        logger.info(f"Estimated {estimate.kj} kJ ({estimate.activity}, MET {estimate.met_used})")
        return estimate
