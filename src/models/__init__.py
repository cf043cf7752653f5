"""SQLAlchemy models."""

from src.models.grocery_list import GroceryList, GroceryListItem
from src.models.meal_idea import MealIdea
from src.models.notification import Notification
from src.models.pantry import PantryItem
from src.models.user import User

__all__ = [
    "User",
    "PantryItem",
    "Notification",
    "GroceryList",
    "GroceryListItem",
    "MealIdea",
]
