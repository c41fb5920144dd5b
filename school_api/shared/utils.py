"""Shared utility functions."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO 8601 date or date-time string.

    Raises ``ValueError`` for anything ``datetime.fromisoformat`` rejects,
    including blank strings.
    """
    candidate = value.strip()
    if not candidate:
        raise ValueError("must be an ISO 8601 date-time string")
    try:
        return datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("must be an ISO 8601 date-time string") from exc


def unique_in_order(values: list[str]) -> list[str]:
    """Drop repeated values keeping the first occurrence."""
    return list(dict.fromkeys(values))
