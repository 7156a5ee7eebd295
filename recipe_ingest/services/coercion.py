"""
Ingredient Coercion.

This module normalizes the heterogeneous ingredient data returned by the
model-parsing step (plain strings, partial dicts, flat or grouped lists)
into canonical StructuredIngredient / IngredientGroup lists.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from ..const import DEFAULT_GROUP_NAME
from ..models.recipe import IngredientGroup, Outcome, StructuredIngredient, Substitution
from ..parsers.ingredient_parser import parse_ingredient_string

_LOGGER = logging.getLogger(__name__)

# Placeholder values models emit instead of a real null
NULL_LIKE = ('', 'null', 'None', 'none', 'undefined')


def _clean_text(value: Any) -> str | None:
    """Return stripped text, or None for missing and null-like values."""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        # Format quantity to remove unnecessary decimals
        if value == int(value):
            return str(int(value))
        return f"{value:.3f}".rstrip('0').rstrip('.')
    if isinstance(value, str):
        text = value.strip()
        return None if text in NULL_LIKE else text
    return None


def _coerce_substitutions(value: Any, outcome: Outcome) -> list[Substitution] | None:
    if not isinstance(value, (list, tuple)):
        return None

    substitutions = []
    for item in value:
        if isinstance(item, Substitution):
            substitutions.append(item)
            continue
        if isinstance(item, Mapping) and _clean_text(item.get('name')):
            amount = item.get('amount')
            if isinstance(amount, str):
                amount = _clean_text(amount)
            elif isinstance(amount, bool) or not isinstance(amount, (int, float)):
                amount = None
            substitutions.append(Substitution(
                name=_clean_text(item.get('name')),
                amount=amount,
                unit=_clean_text(item.get('unit')),
                description=_clean_text(item.get('description')),
            ))
            continue
        _LOGGER.warning("Skipping invalid substitution item: %r", item)
        outcome.warn(f"Skipped invalid substitution: {item!r}")
    return substitutions


def _coerce_item(item: Any, outcome: Outcome) -> StructuredIngredient | None:
    if isinstance(item, StructuredIngredient):
        return item

    if isinstance(item, str):
        if not item.strip():
            return None
        parsed = parse_ingredient_string(item)
        # Same null-like rules as object items, so coercion stays idempotent
        name = _clean_text(parsed.name)
        if name is None:
            _LOGGER.warning("Skipping ingredient with placeholder name: %r", item)
            outcome.warn(f"Skipped ingredient with placeholder name: {item!r}")
            return None
        return StructuredIngredient(
            name=name,
            amount=_clean_text(parsed.amount),
            unit=_clean_text(parsed.unit),
            preparation=_clean_text(parsed.preparation),
            suggested_substitutions=None,
        )

    if isinstance(item, Mapping):
        name = item.get('name')
        if isinstance(name, str) and _clean_text(name):
            try:
                return StructuredIngredient(
                    name=name.strip(),
                    amount=_clean_text(item.get('amount')),
                    unit=_clean_text(item.get('unit')),
                    preparation=_clean_text(item.get('preparation')),
                    suggested_substitutions=_coerce_substitutions(
                        item.get('suggested_substitutions'), outcome),
                )
            except ValidationError as e:
                _LOGGER.warning("Skipping ingredient %r: %s", name, e)
                outcome.warn(f"Skipped invalid ingredient {name!r}")
                return None

    _LOGGER.warning("Skipping invalid ingredient item: %r", item)
    outcome.warn(f"Skipped invalid ingredient item: {item!r}")
    return None


def coerce_structured_ingredients_with_warnings(
    items: Iterable[Any] | None
) -> Outcome[list[StructuredIngredient]]:
    """Coerce mixed ingredient items, keeping non-fatal warnings.

    Args:
        items: Strings, dicts, StructuredIngredient objects or None entries

    Returns:
        Outcome wrapping the canonical ingredient list
    """
    outcome: Outcome[list[StructuredIngredient]] = Outcome([])
    if items is None:
        return outcome
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Iterable):
        _LOGGER.warning("Expected a list of ingredients, got %s", type(items).__name__)
        outcome.warn(f"Expected a list of ingredients, got {type(items).__name__}")
        return outcome

    for item in items:
        if item is None:
            continue
        ingredient = _coerce_item(item, outcome)
        if ingredient is not None:
            outcome.value.append(ingredient)
    return outcome


def coerce_to_structured_ingredients(items: Iterable[Any] | None) -> list[StructuredIngredient]:
    """Coerce mixed ingredient items into StructuredIngredient objects.

    - Strings are parsed into amount, unit, name and preparation
    - Objects need a non-empty name; missing fields default to None
    - None, empty strings and unusable items are dropped
    """
    return coerce_structured_ingredients_with_warnings(items).value


def coerce_ingredient_groups_with_warnings(groups: Iterable[Any] | None) -> Outcome[list[IngredientGroup]]:
    """Coerce ingredient groups, keeping non-fatal warnings."""
    outcome: Outcome[list[IngredientGroup]] = Outcome([])
    if groups is None:
        return outcome
    if isinstance(groups, (str, bytes, Mapping)) or not isinstance(groups, Iterable):
        _LOGGER.warning("Expected a list of ingredient groups, got %s", type(groups).__name__)
        outcome.warn(f"Expected a list of ingredient groups, got {type(groups).__name__}")
        return outcome

    for group in groups:
        if isinstance(group, IngredientGroup):
            group = group.model_dump()
        if not isinstance(group, Mapping):
            if group is not None:
                _LOGGER.warning("Skipping invalid ingredient group: %r", group)
                outcome.warn(f"Skipped invalid ingredient group: {group!r}")
            continue

        name = _clean_text(group.get('name')) if isinstance(group.get('name'), str) else None
        ingredients = coerce_structured_ingredients_with_warnings(group.get('ingredients'))
        outcome.warnings.extend(ingredients.warnings)

        if not ingredients.value:
            _LOGGER.debug("Dropping empty ingredient group %r", name)
            continue

        outcome.value.append(IngredientGroup(
            name=name or DEFAULT_GROUP_NAME,
            ingredients=ingredients.value,
        ))
    return outcome


def coerce_to_ingredient_groups(groups: Iterable[Any] | None) -> list[IngredientGroup]:
    """Coerce ingredient groups into IngredientGroup objects.

    Groups without a name are called "Main"; groups left with no
    ingredients after coercion are dropped.
    """
    return coerce_ingredient_groups_with_warnings(groups).value


def ingredients_to_groups(items: Iterable[Any] | None, name: str = DEFAULT_GROUP_NAME) -> list[IngredientGroup]:
    """Wrap a flat ingredient list as a single-group list."""
    ingredients = coerce_to_structured_ingredients(items)
    if not ingredients:
        return []
    return [IngredientGroup(name=name, ingredients=ingredients)]
