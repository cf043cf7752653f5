"""Derived pantry state: days until expiry, expiring soon, low stock.

These values are recomputed on every read and never persisted. ``now`` is an
explicit argument everywhere so callers (and tests) control the clock.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime

LOW_STOCK_THRESHOLD = 2
DEFAULT_REMINDER_WINDOW_DAYS = 3


@dataclass(frozen=True)
class PantryItemEnrichment:
    """Derived fields attached to a pantry item response."""

    days_until_expiry: int | None
    is_expiring_soon: bool
    is_low_stock: bool


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite drops tzinfo) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _calendar_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return as_utc(value).date()
    return value


def resolve_reminder_window(reminder_window_days: int | None) -> int:
    """Return the user's reminder window, falling back to the default of 3 days."""
    if not reminder_window_days or reminder_window_days < 1:
        return DEFAULT_REMINDER_WINDOW_DAYS
    return reminder_window_days


def days_until_expiry(expiration_date: date | datetime | None, now: datetime) -> int | None:
    """Whole calendar days from today to the expiration day.

    Both sides are truncated to midnight first, so an item expiring today is 0
    and an item that expired yesterday is -1.
    """
    if expiration_date is None:
        return None
    return (_calendar_day(expiration_date) - _calendar_day(now)).days


def is_expiring_soon(days_until: int | None, reminder_window_days: int) -> bool:
    """Expired items count as expiring soon."""
    return days_until is not None and days_until <= reminder_window_days


def is_low_stock(quantity: float | None) -> bool:
    """Unknown quantity is never low stock."""
    return quantity is not None and quantity <= LOW_STOCK_THRESHOLD


def enrich(
    quantity: float | None,
    expiration_date: date | datetime | None,
    reminder_window_days: int | None,
    now: datetime,
) -> PantryItemEnrichment:
    """Compute all derived fields for one pantry item."""
    window = resolve_reminder_window(reminder_window_days)
    days = days_until_expiry(expiration_date, now)
    return PantryItemEnrichment(
        days_until_expiry=days,
        is_expiring_soon=is_expiring_soon(days, window),
        is_low_stock=is_low_stock(quantity),
    )


def enrich_pantry_item(
    item, reminder_window_days: int | None, now: datetime
) -> PantryItemEnrichment:
    """Enrich a ``PantryItem`` row (or anything with quantity/expiration_date)."""
    return enrich(item.quantity, item.expiration_date, reminder_window_days, now)
