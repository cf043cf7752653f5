"""Meal suggestion and meal idea schemas."""

from pydantic import AliasChoices, Field, field_validator

from src.schemas.common import CamelModel, UtcDatetime, id_field, reject_null


class MealIngredient(CamelModel):
    """Ingredient line of a suggestion; amounts are illustrative."""

    name: str
    amount: str | None = None
    unit: str | None = None


class NutritionInfo(CamelModel):
    """Rough per-serving nutrition estimate."""

    calories: str | None = None
    protein: str | None = None
    carbs: str | None = None
    fat: str | None = None


class MealSuggestion(CamelModel):
    """A transient meal suggestion. Never persisted unless saved as a MealIdea."""

    title: str
    ingredients: list[MealIngredient] = Field(default_factory=list)
    instructions: str
    detailed_steps: list[str] | None = None
    cook_time: str | None = None
    difficulty: str | None = None
    servings: str | None = None
    tips: str | None = None
    nutrition: NutritionInfo | None = None

    @field_validator("ingredients", mode="before")
    @classmethod
    def coerce_plain_ingredients(cls, value):
        """Accept bare ingredient names as well as structured entries."""
        if isinstance(value, list):
            return [{"name": v} if isinstance(v, str) else v for v in value]
        return value


class MealSuggestRequest(CamelModel):
    """Request meal suggestions for a user's pantry."""

    user_id: int = Field(..., gt=0)
    additional_preferences: str | None = Field(None, max_length=500)


class MealSuggestResponse(CamelModel):
    """Suggestions plus whether the external service produced them."""

    suggestions: list[MealSuggestion]
    using_ai: bool = Field(
        False, validation_alias=AliasChoices("using_ai", "usingAI"), serialization_alias="usingAI"
    )


class MealIdeaCreate(CamelModel):
    """Save a meal idea."""

    user_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=255)
    notes: str | None = Field(None, max_length=2000)


class MealIdeaUpdate(CamelModel):
    """Update a meal idea."""

    title: str | None = Field(None, min_length=1, max_length=255)
    notes: str | None = Field(None, max_length=2000)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value: str | None) -> str:
        return reject_null(value)


class MealIdeaResponse(CamelModel):
    """Meal idea response."""

    id: int = id_field("mealIdeaId")
    user_id: int
    title: str
    notes: str | None
    created_at: UtcDatetime
    updated_at: UtcDatetime
