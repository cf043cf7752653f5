"""Notification model for scheduled expiration reminders."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import NotificationStatus
from src.models.mixins import TimestampMixin


class Notification(Base, TimestampMixin):
    """A reminder scheduled for one pantry item.

    At most one pending notification may exist per pantry item; the scheduler
    checks this before inserting (no database constraint enforces it).
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    pantry_item_id = Column(
        Integer, ForeignKey("pantry_items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    scheduled_for = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=NotificationStatus.PENDING.value)
    sent_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    pantry_item = relationship("PantryItem", back_populates="notifications")
