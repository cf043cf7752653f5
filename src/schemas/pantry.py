"""Pantry schemas."""

from pydantic import Field, field_validator

from src.schemas.common import CamelModel, UtcDatetime, id_field, reject_null


class PantryItemCreate(CamelModel):
    """Create a pantry item.

    ``expirationDate`` accepts a full ISO datetime or a bare ``YYYY-MM-DD``
    (read as UTC midnight).
    """

    user_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    category: str | None = Field(None, max_length=100)
    expiration_date: UtcDatetime | None = None
    source: str | None = Field(None, max_length=100)


class PantryItemUpdate(CamelModel):
    """Update a pantry item. Ownership cannot change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    category: str | None = Field(None, max_length=100)
    expiration_date: UtcDatetime | None = None
    source: str | None = Field(None, max_length=100)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        return reject_null(value)


class PantryItemResponse(CamelModel):
    """Pantry item with derived expiry and stock flags."""

    id: int = id_field("pantryItemId")
    user_id: int
    name: str
    quantity: float | None
    unit: str | None
    category: str | None
    expiration_date: UtcDatetime | None
    source: str | None
    created_at: UtcDatetime
    updated_at: UtcDatetime

    # Derived on read
    days_until_expiry: int | None = None
    is_expiring_soon: bool = False
    is_low_stock: bool = False


class PantryItemListResponse(CamelModel):
    """Filtered pantry items with their count."""

    items: list[PantryItemResponse]
    count: int
