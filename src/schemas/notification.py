"""Notification schemas."""

from pydantic import Field

from src.models.enums import NotificationStatus
from src.schemas.common import CamelModel, UtcDatetime, id_field


class NotificationCreate(CamelModel):
    """Explicitly schedule a notification."""

    pantry_item_id: int = Field(..., gt=0)
    scheduled_for: UtcDatetime
    status: NotificationStatus = NotificationStatus.PENDING


class NotificationUpdate(CamelModel):
    """Reschedule or change status of a notification."""

    scheduled_for: UtcDatetime | None = None
    status: NotificationStatus | None = None


class AutoScheduleRequest(CamelModel):
    """Schedule reminders for all of a user's expiring items."""

    user_id: int = Field(..., gt=0)


class NotificationResponse(CamelModel):
    """Notification with the pantry item it reminds about."""

    id: int = id_field("notificationId")
    pantry_item_id: int
    scheduled_for: UtcDatetime
    status: str
    sent_at: UtcDatetime | None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    pantry_item_name: str | None = None
    expiration_date: UtcDatetime | None = None
