"""Whereabouts error types.

Every failure a service can report derives from :class:`WhereaboutsError`
and carries a stable ``code`` that the HTTP layer forwards to clients:

- ``validation-failed``: field-level problems, detected before any write
- ``not-found``: referenced quarter, slot or template is absent
- ``already-exists``: a quarter already exists for (athlete, year, quarter)
- ``store-error``: the persistence layer failed; not retried
- ``partial-batch-failure``: some chunks committed, a later chunk failed
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from whereabouts.schemas.results import BatchWriteResult
    from whereabouts.schemas.validation import ValidationIssue


class WhereaboutsError(Exception):
    """Base class for all engine errors.

    Attributes:
        code: Stable machine-readable error code
        message: Human-readable description
        details: Extra structured context for the caller
    """

    code: str = "unknown"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(f"{self.code}: {message}")


class ValidationError(WhereaboutsError):
    """Raised when input fails validation. Carries every issue found."""

    code = "validation-failed"

    def __init__(self, message: str, issues: Optional[list[ValidationIssue]] = None):
        self.issues = list(issues or [])
        super().__init__(message, details={"issues": [issue.model_dump(mode="json") for issue in self.issues]})


class NotFoundError(WhereaboutsError):
    code = "not-found"


class QuarterExistsError(WhereaboutsError):
    code = "already-exists"


class StoreError(WhereaboutsError):
    """Raised when the store rejects a read or write."""

    code = "store-error"

    def __init__(self, message: str, original: Optional[BaseException] = None):
        self.original = original
        super().__init__(message, details={"original": repr(original)} if original else None)


class PartialBatchFailure(WhereaboutsError):
    """Raised when a chunked write stopped part way.

    Chunks before ``failed_at_chunk`` stay committed; callers reconcile
    using ``committed_count`` instead of assuming all-or-nothing.
    """

    code = "partial-batch-failure"

    def __init__(self, message: str, result: BatchWriteResult, extra: Optional[dict[str, Any]] = None):
        self.result = result
        self.committed_count = result.committed_count
        self.failed_at_chunk = result.failed_at_chunk
        details = {"committed_count": result.committed_count, "failed_at_chunk": result.failed_at_chunk,
                   "error": result.error, }
        details.update(extra or {})
        super().__init__(message, details=details)
