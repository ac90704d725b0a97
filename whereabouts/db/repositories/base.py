"""Shared repository helpers."""

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from whereabouts.core.errors import StoreError


def commit_or_raise(session: Session, action: str) -> None:
    """Commit the pending unit of work as one transaction.

    On failure the transaction is rolled back and the driver error is
    re-raised as :class:`StoreError`; nothing is retried.
    """
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise StoreError(f"Failed to {action}", original=e) from e
