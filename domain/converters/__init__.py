"""
Domain converters between persistence records and domain models.

- workout_from_record / workout_to_record
- template_from_record / template_to_record
- instance_from_record / instance_to_record
- trophy_from_record / trophy_to_record
- profile_from_record / profile_to_record

Readers accept both the current snake_case layout and the legacy camelCase
layout. Writers always emit the current layout.

Examples:
    >>> from domain.converters import workout_from_record
    >>> workout = workout_from_record({"date": "2024-05-01", "type": "bike", "energyKj": 400})
    >>> workout.energy_kj
    400.0
"""

from domain.converters.record_converters import (
    instance_from_record,
    instance_to_record,
    profile_from_record,
    profile_to_record,
    template_from_record,
    template_to_record,
    trophy_from_record,
    trophy_to_record,
    workout_from_record,
    workout_to_record,
)

__all__ = [
    "workout_from_record",
    "workout_to_record",
    "template_from_record",
    "template_to_record",
    "instance_from_record",
    "instance_to_record",
    "trophy_from_record",
    "trophy_to_record",
    "profile_from_record",
    "profile_to_record",
]
