"""Copy expiring or low-stock pantry items onto a grocery list.

A pantry item is copied at most once per list: the ``pantry_item_id`` link on
existing list items is checked before each insert. Like notification
scheduling, the check-then-insert is not isolated against concurrent calls.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.exceptions import NotFoundError
from src.models.grocery_list import GroceryList, GroceryListItem
from src.models.pantry import PantryItem
from src.models.user import User
from src.services.enrichment import LOW_STOCK_THRESHOLD, as_utc

logger = logging.getLogger(__name__)

DEFAULT_EXPIRING_DAYS = 7
RESTOCK_QUANTITY = 5


def format_quantity(quantity: float | None) -> str:
    """Render 1.0 as "1" and 1.5 as "1.5"."""
    if quantity is None:
        return "unknown"
    return f"{quantity:g}"


class GroceryAutofillService:
    """Service for auto-populating grocery lists from the pantry."""

    def __init__(self, db: Session):
        self.db = db

    def _validate_target(self, list_id: int, user_id: int) -> GroceryList:
        grocery_list = self.db.query(GroceryList).filter(GroceryList.id == list_id).first()
        if not grocery_list:
            raise NotFoundError("Grocery list not found")
        if not self.db.query(User.id).filter(User.id == user_id).first():
            raise NotFoundError("User not found")
        return grocery_list

    def _already_linked(self, list_id: int, pantry_item_id: int) -> bool:
        return (
            self.db.query(GroceryListItem.id)
            .filter(
                GroceryListItem.grocery_list_id == list_id,
                GroceryListItem.pantry_item_id == pantry_item_id,
            )
            .first()
            is not None
        )

    def _copy_items(
        self,
        list_id: int,
        pantry_items: list[PantryItem],
        quantity_for,
        note_for,
    ) -> int:
        added = 0
        for pantry_item in pantry_items:
            if self._already_linked(list_id, pantry_item.id):
                continue
            try:
                self.db.add(
                    GroceryListItem(
                        grocery_list_id=list_id,
                        pantry_item_id=pantry_item.id,
                        name=pantry_item.name,
                        quantity=quantity_for(pantry_item),
                        unit=pantry_item.unit,
                        category=pantry_item.category,
                        note=note_for(pantry_item),
                    )
                )
                self.db.commit()
                added += 1
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Failed to add pantry item {pantry_item.id} to list {list_id}: {e}")
        return added

    def add_expiring(
        self,
        list_id: int,
        user_id: int,
        now: datetime,
        days: int = DEFAULT_EXPIRING_DAYS,
    ) -> int:
        """Add pantry items expiring within ``days`` (including already expired ones).

        Returns:
            Number of grocery list items created
        """
        self._validate_target(list_id, user_id)
        cutoff = as_utc(now) + timedelta(days=days)
        items = (
            self.db.query(PantryItem)
            .filter(
                PantryItem.user_id == user_id,
                PantryItem.expiration_date.isnot(None),
                PantryItem.expiration_date <= cutoff,
            )
            .order_by(PantryItem.expiration_date)
            .all()
        )

        added = self._copy_items(
            list_id,
            items,
            quantity_for=lambda item: item.quantity,
            note_for=lambda item: f"Expiring: {as_utc(item.expiration_date).date().isoformat()}",
        )
        logger.info(f"Added {added} of {len(items)} expiring items to list {list_id}")
        return added

    def add_low_stock(self, list_id: int, user_id: int) -> int:
        """Add low-stock pantry items with a fixed restock quantity.

        Returns:
            Number of grocery list items created
        """
        self._validate_target(list_id, user_id)
        items = (
            self.db.query(PantryItem)
            .filter(
                PantryItem.user_id == user_id,
                PantryItem.quantity.isnot(None),
                PantryItem.quantity <= LOW_STOCK_THRESHOLD,
            )
            .order_by(PantryItem.quantity)
            .all()
        )

        added = self._copy_items(
            list_id,
            items,
            quantity_for=lambda item: RESTOCK_QUANTITY,
            note_for=lambda item: f"Low stock (currently: {format_quantity(item.quantity)})",
        )
        logger.info(f"Added {added} of {len(items)} low stock items to list {list_id}")
        return added
