"""Grocery list models."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import backref, relationship

from src.database import Base
from src.models.enums import GroceryListStatus
from src.models.mixins import TimestampMixin


class GroceryList(Base, TimestampMixin):
    """Shopping list owned by a user."""

    __tablename__ = "grocery_lists"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=GroceryListStatus.ACTIVE.value)

    # Relationships
    user = relationship("User", backref=backref("grocery_lists", cascade="all, delete-orphan"))
    items = relationship(
        "GroceryListItem",
        back_populates="grocery_list",
        cascade="all, delete-orphan",
        order_by="GroceryListItem.id",
    )


class GroceryListItem(Base, TimestampMixin):
    """Line on a grocery list, optionally linked to the pantry item it restocks."""

    __tablename__ = "grocery_list_items"

    id = Column(Integer, primary_key=True, index=True)
    grocery_list_id = Column(
        Integer, ForeignKey("grocery_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Weak reference: deleting the pantry item leaves the line in place
    pantry_item_id = Column(
        Integer, ForeignKey("pantry_items.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name = Column(String(255), nullable=False)
    quantity = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    unit = Column(String(50), nullable=True)
    category = Column(String(100), nullable=True)
    note = Column(String(1000), nullable=True)
    is_checked = Column(Boolean, nullable=False, default=False)

    # Relationships
    grocery_list = relationship("GroceryList", back_populates="items")
    pantry_item = relationship("PantryItem", back_populates="grocery_list_items")
