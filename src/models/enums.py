"""Enums for model fields."""

from enum import Enum


class NotificationStatus(str, Enum):
    """Lifecycle of a scheduled expiration reminder."""

    PENDING = "pending"
    SENT = "sent"
    CANCELLED = "cancelled"


class GroceryListStatus(str, Enum):
    """Status of a grocery list."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class PantryItemSource(str, Enum):
    """Where a pantry item came from."""

    MANUAL = "manual"
    GROCERY_LIST = "grocery_list"
