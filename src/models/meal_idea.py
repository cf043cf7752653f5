"""Saved meal idea model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import backref, relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class MealIdea(Base, TimestampMixin):
    """A meal the user chose to keep, usually from a suggestion."""

    __tablename__ = "meal_ideas"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", backref=backref("meal_ideas", cascade="all, delete-orphan"))
