"""Business logic services."""

from whereabouts.services.completion_tracker import CompletionTracker
from whereabouts.services.slot_persistence import SlotPersistenceCoordinator
from whereabouts.services.quarter_service import QuarterService
from whereabouts.services.template_service import TemplateService

__all__ = [
    "CompletionTracker",
    "SlotPersistenceCoordinator",
    "QuarterService",
    "TemplateService",
]
