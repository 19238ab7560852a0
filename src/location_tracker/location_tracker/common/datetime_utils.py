from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

from ..core.exceptions import ValidationError

LOCAL_ISO_FORMAT = "%Y-%m-%dT%H:%M:%S"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def parse_instant(value: Any) -> datetime:
    """Parse a capture instant into an aware UTC datetime.

    Accepts epoch milliseconds (int/float or a numeric string) and ISO-8601
    strings. Naive ISO values are taken as UTC.
    """

    if isinstance(value, datetime):
        return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if isinstance(value, bool):
        raise ValidationError(f"Invalid timestamp: {value!r}")

    if isinstance(value, (int, float)):
        return _from_millis(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Invalid timestamp: empty value")
        try:
            return _from_millis(float(text))
        except ValueError:
            pass
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid timestamp: {value!r}")
        return parsed.astimezone(timezone.utc) if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    raise ValidationError(f"Invalid timestamp: {value!r}")


def _from_millis(value: float) -> datetime:
    try:
        return datetime.fromtimestamp(float(value) / 1000.0, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ValidationError(f"Invalid timestamp: {value!r}")


def truncate_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision; stored timestamps keep milliseconds only."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def epoch_millis(value: datetime) -> int:
    """Whole milliseconds since the epoch, rounded down."""
    return (parse_instant(value) - EPOCH) // timedelta(milliseconds=1)


def to_iso_utc(value: datetime) -> str:
    """Render like JavaScript's ``toISOString``: millisecond precision, ``Z`` suffix."""
    value = parse_instant(value)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_iso_local(value: datetime) -> str:
    return value.strftime(LOCAL_ISO_FORMAT)


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def format_time(value: datetime) -> str:
    return value.strftime("%H:%M:%S")
