"""FastAPI dependencies for the clock, database lookups and services."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from src.database import get_db
from src.exceptions import NotFoundError
from src.models.user import User
from src.services.grocery_autofill import GroceryAutofillService
from src.services.meal_service import MealService
from src.services.notification_scheduler import NotificationScheduler


def get_now() -> datetime:
    """Current time in UTC. Overridden in tests to pin the clock."""
    return datetime.now(UTC)


def get_user_or_404(db: Session, user_id: int) -> User:
    """Load a user or raise ``NotFoundError``."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def get_notification_scheduler(
    db: Annotated[Session, Depends(get_db)],
) -> NotificationScheduler:
    """Get notification scheduler with dependencies."""
    return NotificationScheduler(db)


def get_grocery_autofill_service(
    db: Annotated[Session, Depends(get_db)],
) -> GroceryAutofillService:
    """Get grocery auto-populate service with dependencies."""
    return GroceryAutofillService(db)


def get_meal_service(
    db: Annotated[Session, Depends(get_db)],
) -> MealService:
    """Get meal suggestion service with dependencies."""
    return MealService(db)
