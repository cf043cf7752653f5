"""User model."""

from sqlalchemy import Boolean, Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Household member owning pantry items, grocery lists and meal ideas."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=True)
    timezone = Column(String(50), nullable=True)
    dietary_tags = Column(String(255), nullable=True)  # "vegetarian,low-sodium"
    allergies = Column(String(500), nullable=True)  # "peanuts,shellfish"
    reminder_window_days = Column(Integer, nullable=True)  # None means default of 3
    notify_email = Column(Boolean, nullable=True, default=True)
    notify_push = Column(Boolean, nullable=True, default=False)
    notify_expiring = Column(Boolean, nullable=True, default=True)
    notify_low_stock = Column(Boolean, nullable=True, default=True)
