from recipe_ingest.models import IngredientGroup, StructuredIngredient, Substitution
from recipe_ingest.services import (
    coerce_structured_ingredients_with_warnings,
    coerce_to_ingredient_groups,
    coerce_to_structured_ingredients,
    ingredients_to_groups,
)

MIXED_ITEMS = [
    None,
    "",
    "2 eggs",
    "1 onion, chopped",
    {"name": "milk", "amount": 1.5, "unit": "cup"},
    {"name": "  butter ", "suggested_substitutions": [
        {"name": "margarine", "amount": "1", "unit": "cup"},
        {"name": "coconut oil", "amount": 0.5},
    ]},
    {"amount": "1"},
    42,
    "salt, none",
    "null",
]


def test_group_coercion_drops_empty_groups():
    groups = coerce_to_ingredient_groups([
        {"name": "Sauce", "ingredients": []},
        {"name": "Main", "ingredients": ["1 cup rice"]},
    ])

    assert groups == [IngredientGroup(name="Main", ingredients=[
        StructuredIngredient(name="rice", amount="1", unit="cup"),
    ])]


def test_mixed_items():
    ingredients = coerce_to_structured_ingredients(MIXED_ITEMS)

    assert [i.name for i in ingredients] == ["eggs", "onion", "milk", "butter", "salt"]
    assert ingredients[0].amount == "2"
    assert ingredients[1].preparation == "chopped"
    assert ingredients[2].amount == "1.5"
    assert ingredients[2].unit == "cup"
    assert ingredients[3].suggested_substitutions == [
        Substitution(name="margarine", amount="1", unit="cup"),
        Substitution(name="coconut oil", amount=0.5),
    ]


def test_invalid_items_produce_warnings():
    outcome = coerce_structured_ingredients_with_warnings(MIXED_ITEMS)
    assert len(outcome.value) == 5
    assert len(outcome.warnings) == 3


def test_missing_fields_default_to_none():
    [ingredient] = coerce_to_structured_ingredients([{"name": "salt"}])
    assert ingredient == StructuredIngredient(name="salt")
    assert ingredient.suggested_substitutions is None
    assert ingredient.is_quantityless


def test_null_like_strings_become_none():
    [ingredient] = coerce_to_structured_ingredients(
        [{"name": "flour", "amount": "None", "unit": "null", "preparation": " "}])
    assert ingredient.amount is None
    assert ingredient.unit is None
    assert ingredient.preparation is None


def test_whole_float_amount_is_formatted():
    [ingredient] = coerce_to_structured_ingredients([{"name": "eggs", "amount": 2.0}])
    assert ingredient.amount == "2"


def test_non_list_substitutions_are_dropped():
    [ingredient] = coerce_to_structured_ingredients(
        [{"name": "oil", "suggested_substitutions": "butter"}])
    assert ingredient.suggested_substitutions is None


def test_invalid_substitution_entries_are_skipped():
    outcome = coerce_structured_ingredients_with_warnings(
        [{"name": "oil", "suggested_substitutions": ["butter", {"name": "lard"}]}])
    [ingredient] = outcome.value
    assert ingredient.suggested_substitutions == [Substitution(name="lard")]
    assert len(outcome.warnings) == 1


def test_missing_or_non_list_input():
    assert coerce_to_structured_ingredients(None) == []
    outcome = coerce_structured_ingredients_with_warnings("2 eggs")
    assert outcome.value == []
    assert outcome.warnings


def test_coercion_is_idempotent():
    once = coerce_to_structured_ingredients(MIXED_ITEMS)

    assert coerce_to_structured_ingredients(once) == once
    assert coerce_to_structured_ingredients([i.model_dump() for i in once]) == once


def test_group_coercion_is_idempotent():
    raw = [
        {"ingredients": ["1 cup rice", {"name": "water", "amount": 2}]},
        {"name": "Sauce", "ingredients": ["2 tbsp soy sauce", None]},
    ]
    once = coerce_to_ingredient_groups(raw)

    assert [g.name for g in once] == ["Main", "Sauce"]
    assert coerce_to_ingredient_groups(once) == once
    assert coerce_to_ingredient_groups([g.model_dump() for g in once]) == once


def test_group_name_defaults_to_main():
    groups = coerce_to_ingredient_groups([{"name": "null", "ingredients": ["salt"]}, None])
    assert [g.name for g in groups] == ["Main"]


def test_ingredients_to_groups():
    [group] = ingredients_to_groups(["1 cup rice", "salt"])
    assert group.name == "Main"
    assert [i.name for i in group.ingredients] == ["rice", "salt"]
    assert ingredients_to_groups([]) == []
    assert ingredients_to_groups(["pepper"], name="Garnish")[0].name == "Garnish"


def test_string_items_follow_placeholder_rules():
    outcome = coerce_structured_ingredients_with_warnings(
        ["salt, none", "2 cups null", "undefined", "1 egg, null"])

    assert outcome.value == [
        StructuredIngredient(name="salt"),
        StructuredIngredient(name="egg", amount="1"),
    ]
    assert len(outcome.warnings) == 2
    assert coerce_to_structured_ingredients([i.model_dump() for i in outcome.value]) == outcome.value
