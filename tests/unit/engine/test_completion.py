"""Tests for the completion percentage, status transitions and slot stats."""

from types import SimpleNamespace

import pytest

from whereabouts.engine.completion import completion_percentage, next_status, slot_stats
from whereabouts.schemas.pattern import LocationType
from whereabouts.schemas.quarter import QuarterStatus


class TestCompletionPercentage:
    @pytest.mark.parametrize("done, total, expected", [
        (0, 91, 0),
        (91, 91, 100),
        (45, 90, 50),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),  # 12.5 rounds up
        (5, 0, 0),
    ])
    def test_values(self, done, total, expected):
        assert completion_percentage(done, total) == expected


class TestNextStatus:
    def test_nothing_filled_is_draft(self):
        assert next_status(QuarterStatus.INCOMPLETE, 0, 0) == QuarterStatus.DRAFT

    def test_partial_is_incomplete(self):
        assert next_status(QuarterStatus.DRAFT, 45, 50) == QuarterStatus.INCOMPLETE

    def test_full_is_complete(self):
        assert next_status(QuarterStatus.INCOMPLETE, 91, 100) == QuarterStatus.COMPLETE

    def test_status_follows_rounded_percentage(self):
        # 364/365 rounds to 100
        assert next_status("draft", 364, completion_percentage(364, 365)) == QuarterStatus.COMPLETE

    @pytest.mark.parametrize("status", [QuarterStatus.SUBMITTED, QuarterStatus.LOCKED])
    def test_terminal_statuses_kept(self, status):
        assert next_status(status, 0, 0) == status
        assert next_status(status, 91, 100) == status


class TestSlotStats:
    def test_breakdown(self):
        slots = [
            SimpleNamespace(location_type=LocationType.HOME, is_competition=False),
            SimpleNamespace(location_type="home", is_competition=False),
            SimpleNamespace(location_type="training", is_competition=True),
        ]
        stats = slot_stats(slots, total_days=4)
        assert stats.completed_days == 3
        assert stats.completion_percentage == 75
        assert stats.missing_days == 1
        assert stats.competition_days == 1
        assert stats.location_breakdown == {"home": 2, "training": 1, "gym": 0}

    def test_empty(self):
        stats = slot_stats([], total_days=91)
        assert stats.completed_days == 0
        assert stats.missing_days == 91
