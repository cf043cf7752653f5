"""Grocery list API endpoints."""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_grocery_autofill_service, get_now, get_user_or_404
from src.database import get_db
from src.exceptions import NotFoundError
from src.models.enums import GroceryListStatus
from src.models.grocery_list import GroceryList, GroceryListItem
from src.models.pantry import PantryItem
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.grocery_list import (
    GroceryListCreate,
    GroceryListItemCreate,
    GroceryListItemResponse,
    GroceryListItemUpdate,
    GroceryListResponse,
    GroceryListUpdate,
)
from src.services.grocery_autofill import DEFAULT_EXPIRING_DAYS, GroceryAutofillService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/grocery-lists", tags=["grocery-lists"])

UserIdQuery = Annotated[int, Query(alias="userId", gt=0)]


def build_grocery_list_response(grocery_list: GroceryList) -> GroceryListResponse:
    """Serialize a list with its items and item count."""
    response = GroceryListResponse.model_validate(grocery_list)
    response.item_count = len(response.items)
    return response


def get_grocery_list_or_404(db: Session, list_id: int) -> GroceryList:
    """Load a grocery list or raise ``NotFoundError``."""
    grocery_list = db.query(GroceryList).filter(GroceryList.id == list_id).first()
    if not grocery_list:
        raise NotFoundError("Grocery list not found")
    return grocery_list


def get_list_item_or_404(db: Session, list_id: int, item_id: int) -> GroceryListItem:
    """Load an item that belongs to the given list."""
    item = (
        db.query(GroceryListItem)
        .filter(GroceryListItem.id == item_id, GroceryListItem.grocery_list_id == list_id)
        .first()
    )
    if not item:
        raise NotFoundError("Item not found in this list")
    return item


def _check_pantry_item(db: Session, pantry_item_id: int | None) -> None:
    if pantry_item_id is None:
        return
    if not db.query(PantryItem.id).filter(PantryItem.id == pantry_item_id).first():
        raise NotFoundError("Pantry item not found")


@router.get("", response_model=ApiResponse[list[GroceryListResponse]])
def list_grocery_lists(
    user_id: UserIdQuery,
    db: Annotated[Session, Depends(get_db)],
    list_status: GroceryListStatus | None = Query(default=None, alias="status"),
):
    """List a user's grocery lists, newest first."""
    query = db.query(GroceryList).filter(GroceryList.user_id == user_id)
    if list_status:
        query = query.filter(GroceryList.status == list_status.value)
    lists = query.order_by(GroceryList.created_at.desc(), GroceryList.id.desc()).all()
    return ApiResponse(data=[build_grocery_list_response(lst) for lst in lists])


@router.get("/{list_id}", response_model=ApiResponse[GroceryListResponse])
def get_grocery_list(list_id: int, db: Annotated[Session, Depends(get_db)]):
    """Get a grocery list with its items in the order they were added."""
    grocery_list = get_grocery_list_or_404(db, list_id)
    return ApiResponse(data=build_grocery_list_response(grocery_list))


@router.post(
    "", response_model=ApiResponse[GroceryListResponse], status_code=status.HTTP_201_CREATED
)
def create_grocery_list(list_data: GroceryListCreate, db: Annotated[Session, Depends(get_db)]):
    """Create a grocery list."""
    get_user_or_404(db, list_data.user_id)

    grocery_list = GroceryList(
        user_id=list_data.user_id,
        title=list_data.title,
        status=list_data.status.value,
    )
    db.add(grocery_list)
    db.commit()
    db.refresh(grocery_list)

    logger.info(f"Created grocery list {grocery_list.id} for user {list_data.user_id}")
    return ApiResponse(data=build_grocery_list_response(grocery_list))


@router.put("/{list_id}", response_model=ApiResponse[GroceryListResponse])
def update_grocery_list(
    list_id: int,
    list_data: GroceryListUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Rename a grocery list or change its status."""
    grocery_list = get_grocery_list_or_404(db, list_id)

    if list_data.title is not None:
        grocery_list.title = list_data.title
    if list_data.status is not None:
        grocery_list.status = list_data.status.value

    db.commit()
    db.refresh(grocery_list)
    return ApiResponse(data=build_grocery_list_response(grocery_list))


@router.delete("/{list_id}", response_model=MessageResponse)
def delete_grocery_list(list_id: int, db: Annotated[Session, Depends(get_db)]):
    """Delete a grocery list and its items."""
    grocery_list = get_grocery_list_or_404(db, list_id)
    db.delete(grocery_list)
    db.commit()
    return MessageResponse(message="Grocery list deleted successfully")


@router.post(
    "/{list_id}/items",
    response_model=ApiResponse[GroceryListItemResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_grocery_list_item(
    list_id: int,
    item_data: GroceryListItemCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Add an item to a grocery list."""
    get_grocery_list_or_404(db, list_id)
    _check_pantry_item(db, item_data.pantry_item_id)

    item = GroceryListItem(grocery_list_id=list_id, **item_data.model_dump(exclude_unset=True))
    db.add(item)
    db.commit()
    db.refresh(item)
    return ApiResponse(data=GroceryListItemResponse.model_validate(item))


@router.put("/{list_id}/items/{item_id}", response_model=ApiResponse[GroceryListItemResponse])
def update_grocery_list_item(
    list_id: int,
    item_id: int,
    item_data: GroceryListItemUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Update or check off a grocery list item."""
    item = get_list_item_or_404(db, list_id, item_id)

    update_data = item_data.model_dump(exclude_unset=True)
    if "pantry_item_id" in update_data:
        _check_pantry_item(db, update_data["pantry_item_id"])

    for field, value in update_data.items():
        setattr(item, field, value)

    db.commit()
    db.refresh(item)
    return ApiResponse(data=GroceryListItemResponse.model_validate(item))


@router.delete("/{list_id}/items/{item_id}", response_model=MessageResponse)
def delete_grocery_list_item(
    list_id: int,
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Remove an item from a grocery list."""
    item = get_list_item_or_404(db, list_id, item_id)
    db.delete(item)
    db.commit()
    return MessageResponse(message="Item removed from list")


@router.post("/{list_id}/add-expiring", response_model=MessageResponse)
def add_expiring_items(
    list_id: int,
    user_id: UserIdQuery,
    autofill: Annotated[GroceryAutofillService, Depends(get_grocery_autofill_service)],
    now: Annotated[datetime, Depends(get_now)],
    days: int = Query(default=DEFAULT_EXPIRING_DAYS, ge=0, le=365),
):
    """Copy pantry items expiring within ``days`` onto the list."""
    added = autofill.add_expiring(list_id, user_id, now=now, days=days)
    return MessageResponse(message=f"Added {added} expiring items to list")


@router.post("/{list_id}/add-low-stock", response_model=MessageResponse)
def add_low_stock_items(
    list_id: int,
    user_id: UserIdQuery,
    autofill: Annotated[GroceryAutofillService, Depends(get_grocery_autofill_service)],
):
    """Copy low-stock pantry items onto the list with a restock quantity."""
    added = autofill.add_low_stock(list_id, user_id)
    return MessageResponse(message=f"Added {added} low stock items to list")
