"""Deterministic keyword-based meal suggestions - no LLM calls.

Used whenever the text-generation service is disabled, times out, or returns
something unusable. Ingredient names are matched by case-insensitive substring
against fixed keyword sets, and each meal category has a fixed template.
Amounts are illustrative and are not taken from actual pantry quantities.

Allergies are accepted but not used to filter suggestions.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from src.schemas.meal import MealIngredient, MealSuggestion

MAX_SUGGESTIONS = 3

PROTEIN_KEYWORDS = ("chicken", "beef", "fish", "tofu", "eggs", "egg", "pork", "shrimp", "salmon")
CARB_KEYWORDS = ("rice", "pasta", "bread", "potato", "noodles", "quinoa")
VEGGIE_KEYWORDS = (
    "tomato",
    "onion",
    "pepper",
    "carrot",
    "lettuce",
    "spinach",
    "broccoli",
    "garlic",
    "zucchini",
)
DAIRY_KEYWORDS = ("milk", "cheese", "butter", "yogurt", "cream")
EGG_KEYWORD = "egg"

STIR_FRY_KEYWORDS = (
    "chicken",
    "beef",
    "tofu",
    "tomato",
    "onion",
    "pepper",
    "carrot",
    "garlic",
    "rice",
)
OMELETTE_FILLING_KEYWORDS = ("cheese", "tomato", "onion", "pepper", "spinach", "mushroom")
SALAD_KEYWORDS = ("tomato", "lettuce", "cucumber", "pepper", "onion", "carrot", "spinach", "cheese")

# (keyword found in the salad picks, ingredient line)
SALAD_COMPONENTS = (
    ("lettuce", MealIngredient(name="lettuce", amount="4", unit="cups chopped")),
    ("tomato", MealIngredient(name="tomato", amount="2", unit="medium")),
    ("cucumber", MealIngredient(name="cucumber", amount="1", unit="medium")),
    ("pepper", MealIngredient(name="bell pepper", amount="1", unit="medium")),
    ("onion", MealIngredient(name="onion", amount="1/4", unit="cup sliced")),
    ("carrot", MealIngredient(name="carrot", amount="1", unit="medium")),
)
SALAD_DRESSING = (
    MealIngredient(name="olive oil", amount="3", unit="tbsp"),
    MealIngredient(name="lemon juice", amount="1", unit="tbsp"),
)
OMELETTE_BASE = (
    MealIngredient(name="eggs", amount="3", unit="large"),
    MealIngredient(name="milk", amount="2", unit="tbsp"),
    MealIngredient(name="butter", amount="1", unit="tbsp"),
)
OMELETTE_ADDITIONS = (
    ("cheese", MealIngredient(name="cheese", amount="1/4", unit="cup shredded")),
    ("tomato", MealIngredient(name="tomato", amount="1", unit="small diced")),
    ("spinach", MealIngredient(name="spinach", amount="1/2", unit="cup")),
)
COMFORT_BOWL_EXTRAS = (
    ("tomato", MealIngredient(name="tomato", amount="2", unit="medium")),
    ("onion", MealIngredient(name="onion", amount="1", unit="medium")),
    ("garlic", MealIngredient(name="garlic", amount="2", unit="cloves")),
)
SURPRISE_UNITS = ("cup", "lb")


@dataclass(frozen=True)
class IngredientProfile:
    """Which broad food groups are present in a pantry."""

    has_protein: bool
    has_carbs: bool
    has_veggies: bool
    has_eggs: bool
    has_dairy: bool


def _contains_any(name: str, keywords: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in keywords)


def _matching(ingredients: Sequence[str], keywords: Iterable[str]) -> list[str]:
    keywords = tuple(keywords)
    return [name for name in ingredients if _contains_any(name, keywords)]


def _has_tag(dietary_tags: str | None, tag: str) -> bool:
    return bool(dietary_tags) and tag in dietary_tags.lower()


def classify_ingredients(
    ingredients: Sequence[str], dietary_tags: str | None = None
) -> IngredientProfile:
    """Detect food groups by keyword substring. Vegan users never 'have' protein."""
    is_vegan = _has_tag(dietary_tags, "vegan")
    return IngredientProfile(
        has_protein=not is_vegan and bool(_matching(ingredients, PROTEIN_KEYWORDS)),
        has_carbs=bool(_matching(ingredients, CARB_KEYWORDS)),
        has_veggies=bool(_matching(ingredients, VEGGIE_KEYWORDS)),
        has_eggs=bool(_matching(ingredients, (EGG_KEYWORD,))),
        has_dairy=bool(_matching(ingredients, DAIRY_KEYWORDS)),
    )


def _stir_fry(ingredients: Sequence[str]) -> MealSuggestion:
    picks = _matching(ingredients, STIR_FRY_KEYWORDS)[:6]
    return MealSuggestion(
        title="🍳 Savory Stir-Fry Bowl",
        ingredients=[MealIngredient(name=name) for name in picks],
        instructions=(
            "Cut protein into bite-sized pieces and season. Heat oil in a wok or large pan "
            "over high heat. Stir-fry protein until golden, then add vegetables. Season with "
            "soy sauce, garlic, and your favorite spices. Serve over rice or noodles."
        ),
        detailed_steps=[
            "Step 1: Cut your protein into bite-sized pieces and season with salt, pepper, "
            "and your favorite spices.",
            "Step 2: Heat 2 tablespoons of oil in a wok or large pan over high heat until "
            "shimmering.",
            "Step 3: Stir-fry the protein for 3-4 minutes until golden and cooked through, "
            "then set aside.",
            "Step 4: Add the chopped vegetables and stir-fry for 2-3 minutes until "
            "crisp-tender.",
            "Step 5: Return the protein to the pan with 2-3 tablespoons of soy sauce and "
            "minced garlic.",
            "Step 6: Toss for 1 more minute and serve hot over rice or noodles.",
        ],
        cook_time="25 minutes",
        difficulty="Easy",
        servings="2 servings",
        tips=(
            "Get the pan very hot before adding anything, and cook in batches rather than "
            "crowding the pan."
        ),
    )


def _omelette(ingredients: Sequence[str]) -> MealSuggestion:
    fillings = ["eggs", *_matching(ingredients, OMELETTE_FILLING_KEYWORDS)][:5]
    lines = list(OMELETTE_BASE)
    lines.extend(line for keyword, line in OMELETTE_ADDITIONS if _matching(fillings, (keyword,)))
    return MealSuggestion(
        title="🥚 Fluffy Veggie Omelette",
        ingredients=lines,
        instructions=(
            "Beat eggs with a splash of milk, salt, and pepper. Melt butter in a non-stick pan "
            "over medium heat. Pour in the eggs, let them set slightly, then add fillings to one "
            "half. Fold over and cook until just set. Serve with toast."
        ),
        detailed_steps=[
            "Step 1: Beat 2-3 eggs with 1-2 tablespoons of milk, salt, and pepper.",
            "Step 2: Melt 1 tablespoon of butter in a non-stick pan over medium-low heat.",
            "Step 3: Pour in the eggs and leave them for 30 seconds until the edges set.",
            "Step 4: Lift the edges and tilt the pan so uncooked egg runs underneath.",
            "Step 5: While the top is still slightly runny, add fillings to one half.",
            "Step 6: Fold the other half over, cook 1 more minute, and serve with toast.",
        ],
        cook_time="15 minutes",
        difficulty="Easy",
        servings="1 serving",
        tips="Low heat and patience make a fluffy omelette.",
    )


def _garden_salad(salad_picks: Sequence[str]) -> MealSuggestion:
    lines = [line for keyword, line in SALAD_COMPONENTS if _matching(salad_picks, (keyword,))]
    lines.extend(SALAD_DRESSING)
    return MealSuggestion(
        title="🥗 Fresh Garden Salad",
        ingredients=lines,
        instructions=(
            "Wash and chop all vegetables into bite-sized pieces and combine in a large bowl. "
            "Whisk olive oil, lemon juice, salt, pepper, and herbs into a dressing. Toss "
            "everything together and serve immediately."
        ),
        detailed_steps=[
            "Step 1: Wash all vegetables under cold running water and pat dry.",
            "Step 2: Chop the vegetables into even, bite-sized pieces.",
            "Step 3: Combine the vegetables in a large salad bowl.",
            "Step 4: Whisk 3 tablespoons olive oil, 1 tablespoon lemon juice, salt, pepper, "
            "and herbs in a small bowl.",
            "Step 5: Drizzle the dressing over the salad and toss gently.",
            "Step 6: Serve right away, topped with cheese, nuts, or croutons if you like.",
        ],
        cook_time="10 minutes",
        difficulty="Easy",
        servings="2 servings",
        tips="Dress the salad just before serving so the vegetables stay crisp.",
    )


def _comfort_bowl(ingredients: Sequence[str]) -> MealSuggestion:
    lines = []
    carbs = _matching(ingredients, CARB_KEYWORDS)
    if carbs:
        lines.append(MealIngredient(name=carbs[0], amount="2", unit="cups cooked"))
    lines.extend(
        line for keyword, line in COMFORT_BOWL_EXTRAS if _matching(ingredients, (keyword,))
    )
    lines.append(MealIngredient(name="olive oil", amount="2", unit="tbsp"))
    return MealSuggestion(
        title="🍝 Comfort Bowl",
        ingredients=lines,
        instructions=(
            "Cook your grain or pasta according to the package. Meanwhile saute vegetables and "
            "protein in olive oil with garlic. Combine everything in a bowl, add your sauce of "
            "choice, and top with fresh herbs or cheese."
        ),
        cook_time="30 minutes",
        difficulty="Easy",
    )


def _chefs_surprise(ingredients: Sequence[str]) -> MealSuggestion:
    lines = [
        MealIngredient(
            name=name,
            amount=str(index + 1),
            unit=SURPRISE_UNITS[index] if index < len(SURPRISE_UNITS) else "piece",
        )
        for index, name in enumerate(ingredients[:5])
    ]
    return MealSuggestion(
        title="✨ Chef's Surprise",
        ingredients=lines,
        instructions=(
            "Get creative! Combine what you have in unexpected ways: roast the vegetables, "
            "make a quick sauce, or build a grain bowl from whatever is on hand."
        ),
        cook_time="30 minutes",
        difficulty="Medium",
    )


def _one_pot(ingredients: Sequence[str]) -> MealSuggestion:
    return MealSuggestion(
        title="🥣 Simple One-Pot Meal",
        ingredients=[MealIngredient(name=name) for name in ingredients[:6]],
        instructions=(
            "Add everything to a large pot with broth or water. Season generously with salt, "
            "pepper, and herbs. Bring to a boil, then simmer until tender. Adjust the "
            "seasoning and serve hot."
        ),
        cook_time="35 minutes",
        difficulty="Easy",
    )


def generate_fallback_suggestions(
    ingredients: Sequence[str],
    dietary_tags: str | None = None,
    allergies: str | None = None,
) -> list[MealSuggestion]:
    """Build up to three meal suggestions from pantry ingredient names.

    Candidates are produced in a fixed order (stir-fry, omelette, garden salad,
    comfort bowl) and the first three win. Generic filler meals are appended
    while fewer than three were produced.

    Args:
        ingredients: Raw pantry item names
        dietary_tags: Comma-joined tags such as "vegetarian,low-sodium"
        allergies: Comma-joined allergens (currently not applied)

    Returns:
        At most ``MAX_SUGGESTIONS`` suggestions
    """
    ingredients = [name for name in ingredients if name]
    profile = classify_ingredients(ingredients, dietary_tags)
    is_vegetarian = _has_tag(dietary_tags, "vegetarian")
    is_vegan = _has_tag(dietary_tags, "vegan")

    suggestions: list[MealSuggestion] = []

    if profile.has_protein and profile.has_veggies and not is_vegetarian:
        suggestions.append(_stir_fry(ingredients))

    if profile.has_eggs and not is_vegan:
        suggestions.append(_omelette(ingredients))

    if profile.has_veggies:
        salad_picks = _matching(ingredients, SALAD_KEYWORDS)[:6]
        if len(salad_picks) >= 2:
            suggestions.append(_garden_salad(salad_picks))

    if profile.has_carbs and (profile.has_veggies or profile.has_protein):
        suggestions.append(_comfort_bowl(ingredients))

    for filler in (_chefs_surprise, _one_pot):
        if len(suggestions) < MAX_SUGGESTIONS:
            suggestions.append(filler(ingredients))

    return suggestions[:MAX_SUGGESTIONS]
