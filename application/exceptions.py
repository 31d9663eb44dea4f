"""
Application-layer exceptions.

These exceptions are used across application and API layers.
"""
from typing import List


class SummitError(Exception):
    """Base class for application errors."""

    pass


class MissingPrerequisiteError(SummitError):
    """Automatic estimation was requested without the fields it needs.

    Carries the specific missing fields so the caller can ask the user for
    exactly those instead of silently defaulting.
    """

    def __init__(self, missing_fields: List[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")
