"""Pydantic schemas for API requests and responses."""

from src.schemas.common import ApiResponse, ErrorResponse, MessageResponse
from src.schemas.grocery_list import (
    GroceryListCreate,
    GroceryListItemCreate,
    GroceryListItemResponse,
    GroceryListItemUpdate,
    GroceryListResponse,
    GroceryListUpdate,
)
from src.schemas.meal import (
    MealIdeaCreate,
    MealIdeaResponse,
    MealIdeaUpdate,
    MealSuggestion,
    MealSuggestRequest,
    MealSuggestResponse,
)
from src.schemas.notification import (
    AutoScheduleRequest,
    NotificationCreate,
    NotificationResponse,
    NotificationUpdate,
)
from src.schemas.pantry import (
    PantryItemCreate,
    PantryItemListResponse,
    PantryItemResponse,
    PantryItemUpdate,
)
from src.schemas.user import UserCreate, UserDetailResponse, UserLogin, UserResponse, UserUpdate

__all__ = [
    "ApiResponse",
    "MessageResponse",
    "ErrorResponse",
    "UserCreate",
    "UserUpdate",
    "UserLogin",
    "UserResponse",
    "UserDetailResponse",
    "PantryItemCreate",
    "PantryItemUpdate",
    "PantryItemResponse",
    "PantryItemListResponse",
    "GroceryListCreate",
    "GroceryListUpdate",
    "GroceryListResponse",
    "GroceryListItemCreate",
    "GroceryListItemUpdate",
    "GroceryListItemResponse",
    "NotificationCreate",
    "NotificationUpdate",
    "NotificationResponse",
    "AutoScheduleRequest",
    "MealSuggestion",
    "MealSuggestRequest",
    "MealSuggestResponse",
    "MealIdeaCreate",
    "MealIdeaUpdate",
    "MealIdeaResponse",
]
