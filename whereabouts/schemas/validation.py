"""
Validation result schemas.

Validation reports problems as data: every issue names the day and field
it concerns, and whether it blocks a write (``error``) or is advisory
(``warning``).
"""

from typing import Literal, Optional

from pydantic import BaseModel

from whereabouts.schemas.pattern import DayOfWeek

IssueField = Literal["location_type", "time_start", "time_end", "time_range", "availability"]
Severity = Literal["error", "warning"]


class ValidationIssue(BaseModel):
    day: Optional[DayOfWeek] = None
    field: IssueField
    message: str
    severity: Severity = "error"


class PatternValidationResult(BaseModel):
    is_valid: bool
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []


class LocationAvailability(BaseModel):
    available: bool
    reason: Optional[str] = None


class SlotTimeCheck(BaseModel):
    valid: bool
    error: Optional[str] = None
