"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as standard ISO 8601 (for node timestamps)."""
    return datetime.now(UTC).isoformat()


def error_code(exc: BaseException) -> str:
    """Return the ServiceError code carried by a repostress exception.

    Examples:
        >>> from repostress.errors import ItemExistsError
        >>> error_code(ItemExistsError("taken"))
        'ITEM_EXISTS'
        >>> error_code(KeyError("x"))
        'INTERNAL'
    """
    return str(getattr(exc, "code", "INTERNAL"))
