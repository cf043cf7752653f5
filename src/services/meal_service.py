"""Meal suggestion orchestration: pantry lookup, LLM first, keyword heuristic second."""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import NotFoundError, UpstreamServiceError
from src.models.pantry import PantryItem
from src.models.user import User
from src.schemas.meal import MealSuggestion, MealSuggestResponse
from src.services.llm import MealSuggestionGenerator
from src.services.meal_suggestions import generate_fallback_suggestions

logger = logging.getLogger(__name__)

EMPTY_PANTRY_SUGGESTION = MealSuggestion(
    title="📦 Empty Pantry",
    ingredients=[],
    instructions="Add items to your pantry to get personalized meal suggestions!",
    cook_time="N/A",
    difficulty="N/A",
)


class MealService:
    """Service for meal suggestions."""

    def __init__(
        self,
        db: Session,
        generator: MealSuggestionGenerator | None = None,
        llm_enabled: bool | None = None,
    ):
        self.db = db
        if llm_enabled is None:
            llm_enabled = get_settings().llm_enabled
        self.generator = generator if llm_enabled else None
        if llm_enabled and self.generator is None:
            self.generator = MealSuggestionGenerator()

    def available_ingredients(self, user_id: int) -> list[str]:
        """Names of the user's in-stock pantry items (unknown quantity counts as in stock)."""
        rows = (
            self.db.query(PantryItem.name)
            .filter(
                PantryItem.user_id == user_id,
                or_(PantryItem.quantity > 0, PantryItem.quantity.is_(None)),
            )
            .order_by(PantryItem.id)
            .all()
        )
        return [name for (name,) in rows]

    async def suggest(
        self, user_id: int, additional_preferences: str | None = None
    ) -> MealSuggestResponse:
        """Suggest meals for a user.

        ``using_ai`` is true only when the LLM actually produced the
        suggestions; any upstream failure falls back to the heuristic.
        """
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        ingredients = self.available_ingredients(user_id)
        if not ingredients:
            return MealSuggestResponse(suggestions=[EMPTY_PANTRY_SUGGESTION], using_ai=False)

        if self.generator is not None:
            try:
                suggestions = await self.generator.generate(
                    ingredients,
                    dietary_tags=user.dietary_tags,
                    allergies=user.allergies,
                    preferences=additional_preferences,
                )
                logger.info(f"LLM produced {len(suggestions)} meal suggestions for user {user_id}")
                return MealSuggestResponse(suggestions=suggestions, using_ai=True)
            except UpstreamServiceError as e:
                logger.warning(f"Falling back to heuristic meal suggestions: {e.message}")

        suggestions = generate_fallback_suggestions(
            ingredients, dietary_tags=user.dietary_tags, allergies=user.allergies
        )
        return MealSuggestResponse(suggestions=suggestions, using_ai=False)
