"""Pantry item model for tracking food at home."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import backref, relationship

from src.database import Base
from src.models.enums import PantryItemSource
from src.models.mixins import TimestampMixin


class PantryItem(Base, TimestampMixin):
    """Pantry item with optional quantity and expiration date.

    Expiring-soon / low-stock flags are derived on every read and never stored.
    """

    __tablename__ = "pantry_items"
    __table_args__ = (
        CheckConstraint("quantity IS NULL OR quantity >= 0", name="ck_pantry_quantity_nonneg"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    quantity = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    unit = Column(String(50), nullable=True)  # "gallon", "lbs", "pcs"
    category = Column(String(100), nullable=True)  # "Dairy", "Produce", etc.
    expiration_date = Column(DateTime(timezone=True), nullable=True, index=True)
    source = Column(String(100), nullable=True, default=PantryItemSource.MANUAL.value)

    # Relationships
    user = relationship("User", backref=backref("pantry_items", cascade="all, delete-orphan"))
    notifications = relationship(
        "Notification",
        back_populates="pantry_item",
        cascade="all, delete-orphan",
    )
    grocery_list_items = relationship("GroceryListItem", back_populates="pantry_item")
