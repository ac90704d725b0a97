"""
Pattern and slot validation.

Most checks return structured issues so a caller can show every problem at
once.  :func:`validate_time_range` is the exception: it raises on the first
violation, which is what single-slot writes rely on.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

from whereabouts.core.errors import ValidationError
from whereabouts.schemas.pattern import (DayOfWeek, DaySlotPattern, LocationSchedule, VALID_LOCATION_TYPES,
                                         WeeklyPattern, )
from whereabouts.schemas.validation import (LocationAvailability, PatternValidationResult, SlotTimeCheck,
                                            ValidationIssue, )

# 24-hour clock; a single-digit hour is tolerated ("6:00").
TIME_24H_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")

SLOT_DURATION_MINUTES = 60

# Earliest start and latest end a slot may have
SLOT_WINDOW_START_MINUTES = 5 * 60
SLOT_WINDOW_END_MINUTES = 23 * 60


# ======================================================================
# Time helpers
# ======================================================================


def validate_time_format(value: Optional[str]) -> bool:
    """True if *value* is a 24-hour ``HH:mm`` time."""
    return bool(value) and TIME_24H_RE.match(value) is not None


def time_to_minutes(value: Optional[str]) -> int:
    """Minutes since midnight, or ``-1`` for a malformed time."""
    if not validate_time_format(value):
        return -1
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def validate_time_range(start: str, end: str) -> bool:
    """Check both formats and that *end* is after *start*.

    Raises:
        ValidationError: on the first violation found.
    """
    if not validate_time_format(start):
        raise ValidationError(f'Invalid start time format: "{start}". Expected HH:mm (e.g., 09:00)')
    if not validate_time_format(end):
        raise ValidationError(f'Invalid end time format: "{end}". Expected HH:mm (e.g., 17:00)')
    if time_to_minutes(end) <= time_to_minutes(start):
        raise ValidationError(f"End time ({end}) must be after start time ({start})")
    return True


def validate_slot_duration(start: Optional[str], end: Optional[str]) -> bool:
    """True iff the slot lasts exactly 60 minutes."""
    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end)
    if start_minutes == -1 or end_minutes == -1:
        return False
    return end_minutes - start_minutes == SLOT_DURATION_MINUTES


def validate_slot_time(start: str, end: str) -> SlotTimeCheck:
    """Check a slot lies within 05:00-23:00 and lasts exactly 60 minutes."""
    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end)
    if start_minutes == -1 or end_minutes == -1:
        return SlotTimeCheck(valid=False, error="Time must be in HH:mm format")
    if start_minutes < SLOT_WINDOW_START_MINUTES or end_minutes > SLOT_WINDOW_END_MINUTES:
        return SlotTimeCheck(valid=False, error="Time slot must be between 5:00 AM and 11:00 PM")
    if end_minutes - start_minutes != SLOT_DURATION_MINUTES:
        return SlotTimeCheck(valid=False, error="Time slot must be exactly 60 minutes")
    return SlotTimeCheck(valid=True)


# ======================================================================
# Pattern validation
# ======================================================================


def _issue(day: DayOfWeek, field: str, message: str, severity: str = "error") -> ValidationIssue:
    return ValidationIssue(day=day, field=field, message=f"{day.label}: {message}", severity=severity)


def validate_day_slot_pattern(pattern: DaySlotPattern, day: DayOfWeek | str) -> list[ValidationIssue]:
    """Field-level errors for one weekday's slot."""
    day = DayOfWeek(day)
    issues: list[ValidationIssue] = []

    if not pattern.location_type:
        issues.append(_issue(day, "location_type", "Location type is required"))
    elif pattern.location_type not in VALID_LOCATION_TYPES:
        issues.append(_issue(day, "location_type", f'Invalid location type "{pattern.location_type}"'))

    for field, label in (("time_start", "Start"), ("time_end", "End")):
        value = getattr(pattern, field)
        if not value:
            issues.append(_issue(day, field, f"{label} time is required"))
        elif not validate_time_format(value):
            issues.append(_issue(day, field, f'Invalid {label.lower()} time format "{value}"'))

    if validate_time_format(pattern.time_start) and validate_time_format(pattern.time_end):
        duration = time_to_minutes(pattern.time_end) - time_to_minutes(pattern.time_start)
        if duration <= 0:
            issues.append(_issue(day, "time_range", "End time must be after start time"))
        elif duration != SLOT_DURATION_MINUTES:
            issues.append(_issue(day, "time_range",
                                 f"Slot must be exactly {SLOT_DURATION_MINUTES} minutes (currently {duration} minutes)"))

    return issues


def check_location_availability(day: DayOfWeek | str, start: str, end: str,
                                schedule: Optional[LocationSchedule], ) -> LocationAvailability:
    """Check the slot falls within the location's open hours for *day*."""
    day = DayOfWeek(day)
    if schedule is None:
        return LocationAvailability(available=False, reason="Location not set up")

    open_at, close_at = schedule.hours_for(day)
    if not open_at or not close_at:
        return LocationAvailability(available=False, reason=f"Location not available on {day.label}")
    if not validate_time_format(open_at) or not validate_time_format(close_at):
        return LocationAvailability(available=False, reason="Invalid location schedule")

    if time_to_minutes(start) < time_to_minutes(open_at):
        return LocationAvailability(available=False, reason=f"Slot starts before location opens ({open_at})")
    if time_to_minutes(end) > time_to_minutes(close_at):
        return LocationAvailability(available=False, reason=f"Slot ends after location closes ({close_at})")

    return LocationAvailability(available=True)


def validate_weekly_pattern(pattern: WeeklyPattern,
                            locations: Optional[Mapping[str, Optional[LocationSchedule]]] = None, ) -> PatternValidationResult:
    """Validate all seven days.

    When *locations* (keyed by location type) is given, each error-free day
    is also checked against that location's open hours; problems found
    there are warnings and never make the pattern invalid.
    """
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    for day, day_pattern in pattern.days():
        if day_pattern is None:
            errors.append(_issue(day, "location_type", "Pattern not defined"))
            continue

        day_errors = validate_day_slot_pattern(day_pattern, day)
        errors.extend(day_errors)

        if locations is not None and not day_errors:
            availability = check_location_availability(day, day_pattern.time_start, day_pattern.time_end,
                                                       locations.get(day_pattern.location_type), )
            if not availability.available:
                warnings.append(_issue(day, "availability", availability.reason, severity="warning"))

    return PatternValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def ensure_valid_pattern(pattern: WeeklyPattern,
                         locations: Optional[Mapping[str, Optional[LocationSchedule]]] = None, ) -> PatternValidationResult:
    """Validate and raise :class:`ValidationError` if any error was found."""
    result = validate_weekly_pattern(pattern, locations)
    if not result.is_valid:
        raise ValidationError(f"Weekly pattern has {len(result.errors)} error(s)", issues=result.errors)
    return result


# ======================================================================
# Presentation helpers
# ======================================================================


def format_issues(result: PatternValidationResult) -> list[str]:
    return ([f"Error: {e.message}" for e in result.errors] +
            [f"Warning: {w.message}" for w in result.warnings])


def validation_summary(result: PatternValidationResult) -> str:
    if result.is_valid and not result.warnings:
        return "Pattern is valid"
    if result.is_valid:
        return f"Pattern is valid with {len(result.warnings)} warning(s)"
    return f"Pattern has {len(result.errors)} error(s)"
