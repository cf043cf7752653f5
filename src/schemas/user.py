"""User schemas."""

from pydantic import EmailStr, Field, field_validator

from src.schemas.common import CamelModel, UtcDatetime, id_field, reject_null


class UserCreate(CamelModel):
    """User registration request. There are no passwords; login is an email lookup."""

    email: EmailStr = Field(..., max_length=255)
    name: str | None = Field(None, max_length=100)
    timezone: str | None = Field(None, max_length=50)
    dietary_tags: str | None = Field(None, max_length=255)
    allergies: str | None = Field(None, max_length=500)
    reminder_window_days: int | None = Field(None, ge=1, le=30)
    notify_email: bool | None = None
    notify_push: bool | None = None
    notify_expiring: bool | None = None
    notify_low_stock: bool | None = None


class UserUpdate(CamelModel):
    """Update a user. Only provided fields change."""

    email: EmailStr | None = Field(None, max_length=255)
    name: str | None = Field(None, max_length=100)
    timezone: str | None = Field(None, max_length=50)
    dietary_tags: str | None = Field(None, max_length=255)
    allergies: str | None = Field(None, max_length=500)
    reminder_window_days: int | None = Field(None, ge=1, le=30)
    notify_email: bool | None = None
    notify_push: bool | None = None
    notify_expiring: bool | None = None
    notify_low_stock: bool | None = None

    @field_validator("email")
    @classmethod
    def email_not_null(cls, value: str | None) -> str:
        return reject_null(value)


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)


class UserResponse(CamelModel):
    """User information response."""

    id: int = id_field("userId")
    email: str
    name: str | None
    timezone: str | None
    dietary_tags: str | None
    allergies: str | None
    reminder_window_days: int | None
    notify_email: bool | None
    notify_push: bool | None
    notify_expiring: bool | None
    notify_low_stock: bool | None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class UserCounts(CamelModel):
    """How much a user owns."""

    pantry_items: int = 0
    grocery_lists: int = 0
    meal_ideas: int = 0


class UserDetailResponse(UserResponse):
    """Single user with ownership counts."""

    counts: UserCounts = Field(default_factory=UserCounts)
