"""Meal suggestion and saved meal idea API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_meal_service, get_user_or_404
from src.database import get_db
from src.exceptions import NotFoundError
from src.models.meal_idea import MealIdea
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.meal import (
    MealIdeaCreate,
    MealIdeaResponse,
    MealIdeaUpdate,
    MealSuggestRequest,
    MealSuggestResponse,
)
from src.services.meal_service import MealService

router = APIRouter(prefix="/api/meals", tags=["meals"])


def get_meal_idea_or_404(db: Session, meal_idea_id: int) -> MealIdea:
    """Load a meal idea or raise ``NotFoundError``."""
    meal = db.query(MealIdea).filter(MealIdea.id == meal_idea_id).first()
    if not meal:
        raise NotFoundError("Meal idea not found")
    return meal


@router.post("/suggest", response_model=ApiResponse[MealSuggestResponse])
async def suggest_meals(
    request: MealSuggestRequest,
    meal_service: Annotated[MealService, Depends(get_meal_service)],
):
    """Suggest meals from what is in the user's pantry."""
    result = await meal_service.suggest(request.user_id, request.additional_preferences)
    return ApiResponse(data=result)


@router.get("", response_model=ApiResponse[list[MealIdeaResponse]])
def list_meal_ideas(
    user_id: Annotated[int, Query(alias="userId", gt=0)],
    db: Annotated[Session, Depends(get_db)],
):
    """List a user's saved meal ideas, newest first."""
    meals = (
        db.query(MealIdea)
        .filter(MealIdea.user_id == user_id)
        .order_by(MealIdea.created_at.desc(), MealIdea.id.desc())
        .all()
    )
    return ApiResponse(data=[MealIdeaResponse.model_validate(m) for m in meals])


@router.get("/{meal_idea_id}", response_model=ApiResponse[MealIdeaResponse])
def get_meal_idea(meal_idea_id: int, db: Annotated[Session, Depends(get_db)]):
    """Get a saved meal idea."""
    return ApiResponse(data=MealIdeaResponse.model_validate(get_meal_idea_or_404(db, meal_idea_id)))


@router.post("", response_model=ApiResponse[MealIdeaResponse], status_code=status.HTTP_201_CREATED)
def create_meal_idea(meal_data: MealIdeaCreate, db: Annotated[Session, Depends(get_db)]):
    """Save a meal idea."""
    get_user_or_404(db, meal_data.user_id)

    meal = MealIdea(**meal_data.model_dump(exclude_unset=True))
    db.add(meal)
    db.commit()
    db.refresh(meal)
    return ApiResponse(data=MealIdeaResponse.model_validate(meal))


@router.put("/{meal_idea_id}", response_model=ApiResponse[MealIdeaResponse])
def update_meal_idea(
    meal_idea_id: int,
    meal_data: MealIdeaUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a saved meal idea."""
    meal = get_meal_idea_or_404(db, meal_idea_id)

    for field, value in meal_data.model_dump(exclude_unset=True).items():
        setattr(meal, field, value)

    db.commit()
    db.refresh(meal)
    return ApiResponse(data=MealIdeaResponse.model_validate(meal))


@router.delete("/{meal_idea_id}", response_model=MessageResponse)
def delete_meal_idea(meal_idea_id: int, db: Annotated[Session, Depends(get_db)]):
    """Delete a saved meal idea."""
    meal = get_meal_idea_or_404(db, meal_idea_id)
    db.delete(meal)
    db.commit()
    return MessageResponse(message="Meal idea deleted successfully")
