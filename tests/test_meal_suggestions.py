"""Keyword heuristic meal suggestion tests."""

import pytest

from src.services.meal_suggestions import (
    MAX_SUGGESTIONS,
    classify_ingredients,
    generate_fallback_suggestions,
)

STIR_FRY = "🍳 Savory Stir-Fry Bowl"
OMELETTE = "🥚 Fluffy Veggie Omelette"
SALAD = "🥗 Fresh Garden Salad"
COMFORT = "🍝 Comfort Bowl"
SURPRISE = "✨ Chef's Surprise"
ONE_POT = "🥣 Simple One-Pot Meal"


def titles(suggestions):
    return [s.title for s in suggestions]


def test_classify_is_case_insensitive_substring():
    profile = classify_ingredients(["Chicken Breast", "Basmati RICE", "Cherry Tomatoes"])
    assert profile.has_protein
    assert profile.has_carbs
    assert profile.has_veggies
    assert not profile.has_eggs
    assert not profile.has_dairy


def test_classify_vegan_has_no_protein():
    profile = classify_ingredients(["tofu", "eggs"], dietary_tags="Vegan")
    assert not profile.has_protein
    assert profile.has_eggs


def test_chicken_rice_tomato_onion():
    suggestions = generate_fallback_suggestions(
        ["chicken breast", "rice", "tomatoes", "onions"]
    )
    assert titles(suggestions) == [STIR_FRY, SALAD, COMFORT]

    stir_fry = suggestions[0]
    assert [i.name for i in stir_fry.ingredients] == [
        "chicken breast",
        "rice",
        "tomatoes",
        "onions",
    ]
    salad = suggestions[1]
    assert [i.name for i in salad.ingredients] == ["tomato", "onion", "olive oil", "lemon juice"]


def test_vegetarian_skips_stir_fry():
    suggestions = generate_fallback_suggestions(
        ["chicken", "eggs", "cheese", "spinach", "rice"], dietary_tags="vegetarian"
    )
    assert titles(suggestions) == [OMELETTE, SALAD, COMFORT]


def test_vegan_drops_protein_and_eggs():
    suggestions = generate_fallback_suggestions(
        ["eggs", "milk", "chicken"], dietary_tags="vegan,low-sodium"
    )
    assert titles(suggestions) == [SURPRISE, ONE_POT]


def test_omelette_additions_follow_fillings():
    suggestions = generate_fallback_suggestions(["eggs", "cheddar cheese", "spinach"])
    assert titles(suggestions)[:2] == [STIR_FRY, OMELETTE]
    omelette = suggestions[1]
    names = [i.name for i in omelette.ingredients]
    assert names[:3] == ["eggs", "milk", "butter"]
    assert "cheese" in names
    assert "spinach" in names
    assert "tomato" not in names


def test_salad_needs_two_picks():
    suggestions = generate_fallback_suggestions(["garlic", "lettuce"])
    assert SALAD not in titles(suggestions)

    suggestions = generate_fallback_suggestions(["garlic", "lettuce", "cucumber"])
    assert SALAD in titles(suggestions)


def test_comfort_bowl_needs_carbs_and_a_partner():
    assert COMFORT not in titles(generate_fallback_suggestions(["pasta", "milk"]))
    bowl = generate_fallback_suggestions(["pasta", "garlic"])[0]
    assert bowl.title == COMFORT
    assert bowl.ingredients[0].name == "pasta"
    assert bowl.ingredients[0].amount == "2"


def test_unmatched_pantry_gets_fillers():
    suggestions = generate_fallback_suggestions(
        ["flour", "sugar", "vanilla", "baking soda", "salt", "cocoa", "yeast"]
    )
    assert titles(suggestions) == [SURPRISE, ONE_POT]

    surprise = suggestions[0]
    assert [(i.name, i.amount, i.unit) for i in surprise.ingredients] == [
        ("flour", "1", "cup"),
        ("sugar", "2", "lb"),
        ("vanilla", "3", "piece"),
        ("baking soda", "4", "piece"),
        ("salt", "5", "piece"),
    ]
    assert len(suggestions[1].ingredients) == 6


def test_one_filler_when_two_matches():
    suggestions = generate_fallback_suggestions(
        ["eggs", "tomato", "onion"], dietary_tags="vegetarian"
    )
    assert titles(suggestions) == [OMELETTE, SALAD, SURPRISE]


def test_never_more_than_three():
    suggestions = generate_fallback_suggestions(
        ["chicken", "eggs", "tomato", "lettuce", "rice", "cheese"]
    )
    assert len(suggestions) == MAX_SUGGESTIONS
    assert titles(suggestions) == [STIR_FRY, OMELETTE, SALAD]


def test_allergies_do_not_filter():
    with_allergy = generate_fallback_suggestions(["eggs", "tomato"], allergies="eggs")
    without = generate_fallback_suggestions(["eggs", "tomato"])
    assert titles(with_allergy) == titles(without)


@pytest.mark.parametrize("ingredients", [[], ["", ""]])
def test_empty_input_never_raises(ingredients):
    suggestions = generate_fallback_suggestions(ingredients)
    assert titles(suggestions) == [SURPRISE, ONE_POT]
    assert suggestions[0].ingredients == []
