"""LLM prompt templates for meal suggestions."""

MAX_PROMPT_INGREDIENTS = 15

MEAL_SUGGESTION_SYSTEM_PROMPT = (
    "You are a creative chef assistant. Always respond with valid JSON only, "
    "no markdown or extra text."
)


def get_meal_suggestion_prompt(
    ingredients: list[str],
    dietary_tags: str | None = None,
    allergies: str | None = None,
    preferences: str | None = None,
) -> str:
    """Generate prompt for suggesting three meals from pantry ingredients.

    Only the first ``MAX_PROMPT_INGREDIENTS`` ingredients are sent.
    """
    ingredient_list = ", ".join(ingredients[:MAX_PROMPT_INGREDIENTS])

    constraints = []
    if dietary_tags:
        constraints.append(f"Dietary preferences: {dietary_tags}")
    if allergies:
        constraints.append(f"Allergies to AVOID: {allergies}")
    if preferences:
        constraints.append(f"Additional preferences: {preferences}")
    constraints_text = (
        "\n\nIMPORTANT CONSTRAINTS:\n" + "\n".join(constraints) if constraints else ""
    )

    return f"""Based on these available ingredients, suggest 3 meal ideas.

Available ingredients: {ingredient_list}{constraints_text}

For each meal, provide:
1. A creative, appetizing title
2. Ingredients with specific amounts and units
3. Brief cooking instructions (3-4 sentences)
4. Detailed numbered steps (5-8 steps)
5. Estimated cook time
6. Difficulty level (Easy/Medium/Hard)
7. Number of servings
8. Optional cooking tips
9. Optional nutrition info per serving (calories, protein, carbs, fat)

Respond ONLY with a JSON array in this exact format:
[
  {{
    "title": "Meal Name",
    "ingredients": [
      {{"name": "chicken breast", "amount": "1", "unit": "lb"}},
      {{"name": "rice", "amount": "2", "unit": "cups"}}
    ],
    "instructions": "Brief summary...",
    "detailedSteps": ["Step 1: ...", "Step 2: ..."],
    "cookTime": "30 minutes",
    "difficulty": "Easy",
    "servings": "2 servings",
    "tips": "Optional tip",
    "nutrition": {{"calories": "~350", "protein": "~25g", "carbs": "~40g", "fat": "~12g"}}
  }}
]"""
