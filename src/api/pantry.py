"""Pantry API endpoints."""

import logging
from datetime import datetime, timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_notification_scheduler, get_now, get_user_or_404
from src.database import get_db
from src.exceptions import NotFoundError
from src.models.pantry import PantryItem
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.pantry import (
    PantryItemCreate,
    PantryItemListResponse,
    PantryItemResponse,
    PantryItemUpdate,
)
from src.services.enrichment import LOW_STOCK_THRESHOLD, enrich_pantry_item
from src.services.grocery_autofill import DEFAULT_EXPIRING_DAYS
from src.services.notification_scheduler import NotificationScheduler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pantry", tags=["pantry"])

UserIdQuery = Annotated[int, Query(alias="userId", gt=0)]


def build_pantry_item_response(
    item: PantryItem, reminder_window_days: int | None, now: datetime
) -> PantryItemResponse:
    """Serialize a pantry item with its derived expiry and stock flags."""
    enrichment = enrich_pantry_item(item, reminder_window_days, now)
    response = PantryItemResponse.model_validate(item)
    response.days_until_expiry = enrichment.days_until_expiry
    response.is_expiring_soon = enrichment.is_expiring_soon
    response.is_low_stock = enrichment.is_low_stock
    return response


def get_pantry_item_or_404(db: Session, item_id: int) -> PantryItem:
    """Load a pantry item or raise ``NotFoundError``."""
    item = db.query(PantryItem).filter(PantryItem.id == item_id).first()
    if not item:
        raise NotFoundError("Pantry item not found")
    return item


@router.get("", response_model=ApiResponse[list[PantryItemResponse]])
def list_pantry_items(
    user_id: UserIdQuery,
    db: Annotated[Session, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
    category: str | None = Query(default=None),
):
    """List a user's pantry items, newest first."""
    user = get_user_or_404(db, user_id)

    query = db.query(PantryItem).filter(PantryItem.user_id == user_id)
    if category:
        query = query.filter(PantryItem.category == category)
    items = query.order_by(PantryItem.created_at.desc(), PantryItem.id.desc()).all()

    return ApiResponse(
        data=[build_pantry_item_response(i, user.reminder_window_days, now) for i in items]
    )


@router.get("/expiring", response_model=ApiResponse[PantryItemListResponse])
def list_expiring_items(
    user_id: UserIdQuery,
    db: Annotated[Session, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
    days: int = Query(default=DEFAULT_EXPIRING_DAYS, ge=0, le=365),
):
    """Items expiring within ``days`` (already expired included), soonest first."""
    user = get_user_or_404(db, user_id)

    cutoff = now + timedelta(days=days)
    items = (
        db.query(PantryItem)
        .filter(
            PantryItem.user_id == user_id,
            PantryItem.expiration_date.isnot(None),
            PantryItem.expiration_date <= cutoff,
        )
        .order_by(PantryItem.expiration_date.asc())
        .all()
    )

    enriched = [build_pantry_item_response(i, user.reminder_window_days, now) for i in items]
    return ApiResponse(data=PantryItemListResponse(items=enriched, count=len(enriched)))


@router.get("/low-stock", response_model=ApiResponse[PantryItemListResponse])
def list_low_stock_items(
    user_id: UserIdQuery,
    db: Annotated[Session, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Items at or below the low-stock threshold, lowest quantity first."""
    user = get_user_or_404(db, user_id)

    items = (
        db.query(PantryItem)
        .filter(
            PantryItem.user_id == user_id,
            PantryItem.quantity.isnot(None),
            PantryItem.quantity <= LOW_STOCK_THRESHOLD,
        )
        .order_by(PantryItem.quantity.asc())
        .all()
    )

    enriched = [build_pantry_item_response(i, user.reminder_window_days, now) for i in items]
    return ApiResponse(data=PantryItemListResponse(items=enriched, count=len(enriched)))


@router.get("/categories", response_model=ApiResponse[list[str]])
def list_categories(user_id: UserIdQuery, db: Annotated[Session, Depends(get_db)]):
    """Distinct categories used in a user's pantry."""
    rows = (
        db.query(PantryItem.category)
        .filter(PantryItem.user_id == user_id, PantryItem.category.isnot(None))
        .distinct()
        .order_by(PantryItem.category)
        .all()
    )
    return ApiResponse(data=[category for (category,) in rows if category])


@router.get("/{item_id}", response_model=ApiResponse[PantryItemResponse])
def get_pantry_item(
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Get a single pantry item."""
    item = get_pantry_item_or_404(db, item_id)
    return ApiResponse(
        data=build_pantry_item_response(item, item.user.reminder_window_days, now)
    )


@router.post(
    "", response_model=ApiResponse[PantryItemResponse], status_code=status.HTTP_201_CREATED
)
def create_pantry_item(
    item_data: PantryItemCreate,
    db: Annotated[Session, Depends(get_db)],
    scheduler: Annotated[NotificationScheduler, Depends(get_notification_scheduler)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Create a pantry item and schedule its expiration reminder."""
    user = get_user_or_404(db, item_data.user_id)

    item = PantryItem(**item_data.model_dump(exclude_unset=True))
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Created pantry item {item.id} for user {user.id}")

    scheduler.schedule_for_new_item(item, user.reminder_window_days, now)

    return ApiResponse(data=build_pantry_item_response(item, user.reminder_window_days, now))


@router.put("/{item_id}", response_model=ApiResponse[PantryItemResponse])
def update_pantry_item(
    item_id: int,
    item_data: PantryItemUpdate,
    db: Annotated[Session, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Update a pantry item. Existing notifications are left as they are."""
    item = get_pantry_item_or_404(db, item_id)

    for field, value in item_data.model_dump(exclude_unset=True).items():
        setattr(item, field, value)

    db.commit()
    db.refresh(item)
    return ApiResponse(
        data=build_pantry_item_response(item, item.user.reminder_window_days, now)
    )


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_pantry_item(item_id: int, db: Annotated[Session, Depends(get_db)]):
    """Delete a pantry item and its notifications.

    Grocery list lines copied from it stay, with their pantry link cleared.
    """
    item = get_pantry_item_or_404(db, item_id)
    db.delete(item)
    db.commit()

    logger.info(f"Deleted pantry item {item_id}")
    return MessageResponse(message="Pantry item deleted successfully")
