"""
exceptions.py — Error Taxonomy for Instance Administration

Purpose:
- Give operators one small, stable set of failure types.
- Translate SQLAlchemy driver errors into those types at the service boundary.

Taxonomy:
- StoreUnavailable   → connectivity / transaction failure. Not retried.
- IntegrityViolation → an invariant the reset must establish cannot be satisfied.

Absence of an owner, a personal project or an ownership link is NOT an error;
the reset creates whatever is missing.
"""

from typing import Optional

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError


class ResetError(Exception):
    """Base class for every failure surfaced by the reset command."""


class StoreUnavailable(ResetError):
    """The store could not be reached or the transaction could not complete."""


class IntegrityViolation(ResetError):
    """The store is in a state the reset refuses to reconcile silently."""


def translate_store_error(exc: BaseException) -> Optional[ResetError]:
    """
    Map a SQLAlchemy error onto the taxonomy.

    Returns None for errors that are not store related, so callers re-raise them untouched.
    """
    if isinstance(exc, ResetError):
        return exc
    if isinstance(exc, IntegrityError):
        return IntegrityViolation(f"Store rejected a write: {exc.orig}")
    if isinstance(exc, OperationalError):
        return StoreUnavailable(f"Store unavailable: {exc.orig}")
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StoreUnavailable(f"Store connection lost: {exc.orig}")
    if isinstance(exc, SQLAlchemyError):
        return StoreUnavailable(f"Store error: {exc}")
    return None
