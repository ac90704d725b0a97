"""Timezone-aware timestamps for the ``created_at`` / ``updated_at`` columns."""

import datetime


def utc_now() -> datetime.datetime:
    """Current UTC time, always with ``tzinfo`` set."""
    return datetime.datetime.now(datetime.timezone.utc)
