import pytest

from recipe_ingest.models import (
    AppliedChange,
    IngredientDisplayState,
    ParsedDisplayName,
    StructuredIngredient,
)
from recipe_ingest.services import (
    format_ingredient_display_name,
    parse_ingredient_display_name,
    reconcile_ingredients,
    resolve_original_name,
)


def test_parse_substituted_name():
    assert parse_ingredient_display_name("almond flour (substituted for flour)") == ParsedDisplayName(
        base_name="almond flour", is_removed=False, substituted_for="flour")


def test_parse_removed_name():
    assert parse_ingredient_display_name("butter (removed)") == ParsedDisplayName(
        base_name="butter", is_removed=True)


def test_parse_plain_name():
    assert parse_ingredient_display_name("  sugar ") == ParsedDisplayName(base_name="sugar")


def test_markers_are_case_insensitive():
    assert parse_ingredient_display_name("Butter (REMOVED)").is_removed
    assert parse_ingredient_display_name("Oat Milk (Substituted For Milk)").substituted_for == "Milk"


@pytest.mark.parametrize(
    "name",
    ["flour", "extra-virgin olive oil", "salt (optional)", "chiles (2 types)", "crème fraîche"],
)
def test_removed_round_trip(name):
    state = IngredientDisplayState(status="removed", original_name=name)
    parsed = parse_ingredient_display_name(format_ingredient_display_name(name, state))
    assert parsed == ParsedDisplayName(base_name=name, is_removed=True)


@pytest.mark.parametrize(
    "name, original",
    [("almond flour", "flour"), ("oat milk (unsweetened)", "milk (whole)"), ("tofu", "chicken")],
)
def test_substituted_round_trip(name, original):
    state = IngredientDisplayState(status="substituted", original_name=original)
    parsed = parse_ingredient_display_name(format_ingredient_display_name(name, state))
    assert parsed == ParsedDisplayName(base_name=name, substituted_for=original)


def test_normal_state_keeps_name():
    assert format_ingredient_display_name("flour") == "flour"
    assert format_ingredient_display_name("flour", IngredientDisplayState()) == "flour"


def test_marker_text_in_real_name_is_read_as_state():
    # No escaping exists for names that end in a marker
    assert parse_ingredient_display_name("Brand X (removed)").is_removed


CHANGES = [
    AppliedChange(from_="butter", to=StructuredIngredient(name="coconut oil", amount="1", unit="cup")),
    AppliedChange(from_="sugar", to=None),
]


@pytest.mark.parametrize(
    "display_name, expected",
    [
        ("coconut oil", "butter"),
        ("coconut oil (substituted for butter)", "butter"),
        ("sugar (removed)", "sugar"),
        ("pepper", "pepper"),
    ],
)
def test_resolve_original_name(display_name, expected):
    assert resolve_original_name(CHANGES, display_name) == expected


def test_resolve_accepts_serialized_changes():
    changes = [{"from": "milk", "to": {"name": "oat milk"}}, {"from": "egg", "to": None}]
    assert resolve_original_name(changes, "oat milk") == "milk"
    assert resolve_original_name(None, "oat milk") == "oat milk"


def test_applied_change_serializes_from_alias():
    change = AppliedChange.model_validate({"from": "milk", "to": None})
    assert change.from_ == "milk"
    assert change.is_removal
    assert change.model_dump(by_alias=True) == {"from": "milk", "to": None}


def test_reconcile_ingredients():
    ingredients = [
        StructuredIngredient(name="flour", amount="2", unit="cup"),
        StructuredIngredient(name="butter", amount="1", unit="cup"),
        StructuredIngredient(name="sugar", amount="1/2", unit="cup"),
    ]
    before = [i.model_copy() for i in ingredients]

    flour, butter, sugar = reconcile_ingredients(ingredients, CHANGES)

    assert flour.state.status == "normal"
    assert flour.display_name == "flour"

    assert butter.state == IngredientDisplayState(status="substituted", original_name="butter")
    assert butter.ingredient.name == "coconut oil"
    assert butter.display_name == "coconut oil (substituted for butter)"

    assert sugar.state == IngredientDisplayState(status="removed", original_name="sugar")
    assert sugar.ingredient == ingredients[2]
    assert sugar.display_name == "sugar (removed)"

    assert ingredients == before


def test_reconcile_last_change_wins():
    ingredients = [StructuredIngredient(name="butter")]
    changes = [
        {"from": "butter", "to": None},
        {"from": "butter", "to": {"name": "ghee"}},
    ]

    [butter] = reconcile_ingredients(ingredients, changes)

    assert butter.state.status == "substituted"
    assert butter.display_name == "ghee (substituted for butter)"


def test_reconcile_skips_invalid_changes():
    ingredients = [StructuredIngredient(name="salt")]
    [salt] = reconcile_ingredients(ingredients, ["salt", {"to": None}])
    assert salt.state.status == "normal"
