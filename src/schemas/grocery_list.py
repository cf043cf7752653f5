"""Grocery list schemas."""

from pydantic import Field, field_validator

from src.models.enums import GroceryListStatus
from src.schemas.common import CamelModel, UtcDatetime, id_field, reject_null


class GroceryListCreate(CamelModel):
    """Create a grocery list."""

    user_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=255)
    status: GroceryListStatus = GroceryListStatus.ACTIVE


class GroceryListUpdate(CamelModel):
    """Update a grocery list."""

    title: str | None = Field(None, min_length=1, max_length=255)
    status: GroceryListStatus | None = None


class GroceryListItemCreate(CamelModel):
    """Add an item to a grocery list."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    category: str | None = Field(None, max_length=100)
    note: str | None = Field(None, max_length=1000)
    pantry_item_id: int | None = Field(None, gt=0)


class GroceryListItemUpdate(CamelModel):
    """Update a grocery list item."""

    name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    category: str | None = Field(None, max_length=100)
    note: str | None = Field(None, max_length=1000)
    pantry_item_id: int | None = Field(None, gt=0)
    is_checked: bool | None = None

    @field_validator("name", "is_checked")
    @classmethod
    def required_columns_not_null(cls, value):
        return reject_null(value)


class GroceryListItemResponse(CamelModel):
    """Grocery list item response."""

    id: int = id_field("groceryListItemId")
    grocery_list_id: int
    pantry_item_id: int | None
    name: str
    quantity: float | None
    unit: str | None
    category: str | None
    note: str | None
    is_checked: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime


class GroceryListResponse(CamelModel):
    """Grocery list with its items."""

    id: int = id_field("groceryListId")
    user_id: int
    title: str
    status: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
    items: list[GroceryListItemResponse] = Field(default_factory=list)
    item_count: int = 0
