"""Boundary: instant checking, copying and the serializable text form."""

from __future__ import annotations

import copy
from datetime import date, datetime
from zoneinfo import ZoneInfo

Instant = date | datetime


def check_instant(value: object, name: str) -> None:
    """Reject anything that is not a date or datetime.

    Raises TypeError. All instants in one expansion must share a kind
    (all dates or all datetimes); mixing them fails at comparison time.
    """
    if not isinstance(value, (date, datetime)):
        raise TypeError(
            f"{name} must be a date or datetime, "
            f"got {type(value).__name__}: {value!r}"
        )


def is_date_only(value: Instant) -> bool:
    """True for an all-day (date) instant, False for a datetime."""
    return not isinstance(value, datetime)


def copy_instant(value: Instant) -> Instant:
    """Independent copy of an instant. Never aliases the source value."""
    return copy.copy(value)


def dump_instant(value: Instant) -> str:
    """Serialize an instant to ISO 8601 text.

    Datetimes carrying a ZoneInfo keep their zone key as a bracketed
    suffix, e.g. '2025-03-30T09:00:00+02:00[Europe/Berlin]'. A plain
    offset would lose the DST transitions of later occurrences.
    """
    check_instant(value, "value")
    text = value.isoformat()
    tz = getattr(value, "tzinfo", None)
    if isinstance(tz, ZoneInfo):
        text += f"[{tz.key}]"
    return text


def load_instant(text: str) -> Instant:
    """Inverse of dump_instant. Date-only text yields a date.

    Raises ValueError for text that is not an ISO 8601 date/datetime.
    """
    if not isinstance(text, str):
        raise TypeError(f"serialized instant must be str, got {type(text).__name__}")

    zone_key = None
    if text.endswith("]"):
        text, _, zone_key = text[:-1].partition("[")

    if "T" not in text:
        if zone_key:
            raise ValueError(f"date instant cannot carry a zone: {text}[{zone_key}]")
        return date.fromisoformat(text)

    value = datetime.fromisoformat(text)
    if zone_key:
        zone = ZoneInfo(zone_key)
        if value.tzinfo is None:
            value = value.replace(tzinfo=zone)
        else:
            value = value.astimezone(zone)
    return value
