"""Expiration reminder scheduling.

A reminder fires ``reminder_window_days`` before an item's expiration date.
Each pantry item has at most one pending notification; this is checked with a
query before each insert. Two concurrent ``auto_schedule`` calls for the same
user can both pass the check and insert duplicates. Nothing in the storage
layer prevents that.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.exceptions import NotFoundError
from src.models.enums import NotificationStatus
from src.models.notification import Notification
from src.models.pantry import PantryItem
from src.models.user import User
from src.services.enrichment import as_utc, resolve_reminder_window

logger = logging.getLogger(__name__)


def compute_notify_date(expiration_date: datetime, reminder_window_days: int) -> datetime:
    """Return the moment a reminder should fire for an item."""
    return as_utc(expiration_date) - timedelta(days=reminder_window_days)


class NotificationScheduler:
    """Creates and transitions pantry expiration notifications."""

    def __init__(self, db: Session):
        self.db = db

    def has_pending(self, pantry_item_id: int) -> bool:
        """Check whether the item already has a pending notification."""
        return (
            self.db.query(Notification.id)
            .filter(
                Notification.pantry_item_id == pantry_item_id,
                Notification.status == NotificationStatus.PENDING.value,
            )
            .first()
            is not None
        )

    def _build_notification(
        self, item: PantryItem, reminder_window_days: int, now: datetime
    ) -> Notification | None:
        """Build (but do not add) a pending notification, or None if it would be in the past."""
        if item.expiration_date is None:
            return None
        notify_date = compute_notify_date(item.expiration_date, reminder_window_days)
        if notify_date < as_utc(now):
            return None
        return Notification(
            pantry_item_id=item.id,
            scheduled_for=notify_date,
            status=NotificationStatus.PENDING.value,
        )

    def schedule_for_new_item(
        self,
        item: PantryItem,
        reminder_window_days: int | None,
        now: datetime,
    ) -> Notification | None:
        """Schedule a reminder for a freshly created pantry item.

        Users who never configured a reminder window get no automatic
        reminder on creation; they can still run ``auto_schedule``.
        """
        if item.expiration_date is None or not reminder_window_days:
            return None
        if self.has_pending(item.id):
            return None

        notification = self._build_notification(item, reminder_window_days, now)
        if notification is None:
            logger.info(f"Reminder for pantry item {item.id} would be in the past, skipping")
            return None

        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        logger.info(
            f"Scheduled notification {notification.id} for pantry item {item.id} "
            f"at {notification.scheduled_for}"
        )
        return notification

    def auto_schedule(self, user_id: int, now: datetime) -> int:
        """Create pending notifications for every eligible pantry item of a user.

        Items that already have a pending notification, have no expiration
        date, or whose reminder time has passed are skipped. Calling this
        twice without pantry changes creates nothing the second time.

        Returns:
            Number of notifications created
        """
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        reminder_days = resolve_reminder_window(user.reminder_window_days)
        items = (
            self.db.query(PantryItem)
            .filter(PantryItem.user_id == user_id, PantryItem.expiration_date.isnot(None))
            .all()
        )

        created = 0
        for item in items:
            if self.has_pending(item.id):
                continue

            notification = self._build_notification(item, reminder_days, now)
            if notification is None:
                continue

            try:
                self.db.add(notification)
                self.db.commit()
                created += 1
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Failed to schedule notification for pantry item {item.id}: {e}")

        logger.info(f"Auto-scheduled {created} notifications for user {user_id}")
        return created

    def _get(self, notification_id: int) -> Notification:
        notification = (
            self.db.query(Notification).filter(Notification.id == notification_id).first()
        )
        if not notification:
            raise NotFoundError("Notification not found")
        return notification

    def mark_sent(self, notification_id: int, now: datetime) -> Notification:
        """Mark a notification as sent at ``now``."""
        notification = self._get(notification_id)
        notification.status = NotificationStatus.SENT.value
        notification.sent_at = now
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def cancel(self, notification_id: int) -> Notification:
        """Cancel a notification."""
        notification = self._get(notification_id)
        notification.status = NotificationStatus.CANCELLED.value
        self.db.commit()
        self.db.refresh(notification)
        return notification
