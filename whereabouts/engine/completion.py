"""
Quarter completion rules.

Pure functions behind the completion tracker: the percentage formula,
the status transition and per-quarter slot statistics.
"""

from __future__ import annotations

import math
from typing import Iterable, Protocol

from whereabouts.schemas.pattern import VALID_LOCATION_TYPES, LocationType
from whereabouts.schemas.quarter import TERMINAL_STATUSES, QuarterStatus
from whereabouts.schemas.results import SlotStats


class SlotLike(Protocol):
    location_type: LocationType | str
    is_competition: bool


def completion_percentage(days_completed: int, total_days: int) -> int:
    """``round(days_completed / total_days * 100)`` with halves rounded up."""
    if total_days <= 0:
        return 0
    return int(math.floor(days_completed / total_days * 100 + 0.5))


def next_status(current: QuarterStatus, days_completed: int, percentage: int) -> QuarterStatus:
    """Status after a recompute.

    Submitted and locked quarters keep their status; only an explicit
    unlock outside the engine moves them.
    """
    current = QuarterStatus(current)
    if current in TERMINAL_STATUSES:
        return current
    if days_completed == 0:
        return QuarterStatus.DRAFT
    if percentage < 100:
        return QuarterStatus.INCOMPLETE
    return QuarterStatus.COMPLETE


def slot_stats(slots: Iterable[SlotLike], total_days: int) -> SlotStats:
    slots = list(slots)
    breakdown = {lt: 0 for lt in VALID_LOCATION_TYPES}
    for slot in slots:
        location = LocationType(slot.location_type).value
        breakdown[location] += 1

    completed = len(slots)
    return SlotStats(completed_days=completed, completion_percentage=completion_percentage(completed, total_days),
                     missing_days=max(total_days - completed, 0),
                     competition_days=sum(1 for s in slots if s.is_competition), location_breakdown=breakdown, )
