"""User API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from src.api.dependencies import get_user_or_404
from src.database import get_db
from src.exceptions import ConflictError, NotFoundError
from src.models.grocery_list import GroceryList
from src.models.meal_idea import MealIdea
from src.models.pantry import PantryItem
from src.models.user import User
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.user import (
    UserCounts,
    UserCreate,
    UserDetailResponse,
    UserLogin,
    UserResponse,
    UserUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def _count(db: Session, model, user_id: int) -> int:
    return db.query(func.count(model.id)).filter(model.user_id == user_id).scalar() or 0


@router.get("", response_model=ApiResponse[list[UserResponse]])
def list_users(db: Annotated[Session, Depends(get_db)]):
    """List all users, newest first."""
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return ApiResponse(data=[UserResponse.model_validate(u) for u in users])


@router.post("/login", response_model=ApiResponse[UserResponse])
def login(credentials: UserLogin, db: Annotated[Session, Depends(get_db)]):
    """Look a user up by email. There is no password check."""
    user = db.query(User).filter(User.email == credentials.email).first()
    if not user:
        raise NotFoundError("User not found")
    return ApiResponse(data=UserResponse.model_validate(user))


@router.get("/{user_id}", response_model=ApiResponse[UserDetailResponse])
def get_user(user_id: int, db: Annotated[Session, Depends(get_db)]):
    """Get a user with counts of what they own."""
    user = get_user_or_404(db, user_id)

    response = UserDetailResponse.model_validate(user)
    response.counts = UserCounts(
        pantry_items=_count(db, PantryItem, user_id),
        grocery_lists=_count(db, GroceryList, user_id),
        meal_ideas=_count(db, MealIdea, user_id),
    )
    return ApiResponse(data=response)


@router.post("", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, db: Annotated[Session, Depends(get_db)]):
    """Create a new user."""
    if db.query(User.id).filter(User.email == user_data.email).first():
        raise ConflictError("Email already registered")

    user = User(**user_data.model_dump(exclude_unset=True))
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Created user {user.id}")
    return ApiResponse(data=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=ApiResponse[UserResponse])
def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a user."""
    user = get_user_or_404(db, user_id)

    update_data = user_data.model_dump(exclude_unset=True)
    new_email = update_data.get("email")
    if new_email and new_email != user.email:
        if db.query(User.id).filter(User.email == new_email).first():
            raise ConflictError("Email already registered")

    for field, value in update_data.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, db: Annotated[Session, Depends(get_db)]):
    """Delete a user along with everything they own."""
    user = get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()

    logger.info(f"Deleted user {user_id}")
    return MessageResponse(message="User deleted successfully")
