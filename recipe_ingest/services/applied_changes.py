"""
Applied-Change Reconciliation.

User edits (substitutions and removals) are recorded as AppliedChange
entries keyed by the original ingredient name. This module overlays that
log onto a canonical ingredient list for display, and reads edit state back
out of the legacy display-name suffixes:

    "<name> (removed)"
    "<new name> (substituted for <original name>)"
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from ..const import REMOVED_MARKER, SUBSTITUTED_MARKER
from ..models.recipe import (
    AppliedChange,
    DisplayIngredient,
    IngredientDisplayState,
    ParsedDisplayName,
    StructuredIngredient,
)

_LOGGER = logging.getLogger(__name__)

_REMOVED_RE = re.compile(rf'^(.*?)\s*{re.escape(REMOVED_MARKER)}$', re.IGNORECASE)
_SUBSTITUTED_RE = re.compile(
    rf'^(.*?)\s*\({re.escape(SUBSTITUTED_MARKER)} (.+?)\)$', re.IGNORECASE)

_NORMAL = IngredientDisplayState()


def parse_ingredient_display_name(name: str) -> ParsedDisplayName:
    """Split a display name into its base name and edit state.

    A real ingredient name that itself ends in one of the marker suffixes
    is misread as edited; there is no escaping. :func:`reconcile_ingredients`
    carries the state explicitly instead.

    Examples:
        >>> parse_ingredient_display_name("butter (removed)")
        ParsedDisplayName(base_name='butter', is_removed=True, substituted_for=None)
    """
    match = _REMOVED_RE.match(name)
    if match:
        return ParsedDisplayName(base_name=match.group(1).strip(), is_removed=True)

    match = _SUBSTITUTED_RE.match(name)
    if match:
        return ParsedDisplayName(
            base_name=match.group(1).strip(),
            substituted_for=match.group(2).strip(),
        )

    return ParsedDisplayName(base_name=name.strip())


def format_ingredient_display_name(name: str, state: IngredientDisplayState | None = None) -> str:
    """Render a name with the suffix for its edit state."""
    if state is None or state.status == "normal":
        return name
    if state.status == "removed":
        return f"{name} {REMOVED_MARKER}"
    return f"{name} ({SUBSTITUTED_MARKER} {state.original_name})"


def _as_changes(applied_changes: Iterable[Any] | None) -> list[AppliedChange]:
    changes = []
    for entry in applied_changes or ():
        if isinstance(entry, AppliedChange):
            changes.append(entry)
            continue
        if not isinstance(entry, Mapping):
            _LOGGER.warning("Ignoring invalid applied change %r", entry)
            continue
        try:
            changes.append(AppliedChange.model_validate(entry))
        except ValidationError as e:
            _LOGGER.warning("Ignoring invalid applied change %r: %s", entry, e)
    return changes


def resolve_original_name(applied_changes: Iterable[Any] | None, display_name: str) -> str:
    """Resolve an edited display name to the original ingredient name.

    Args:
        applied_changes: AppliedChange entries or their dict form
        display_name: A name as shown to the user, possibly with a suffix

    Returns:
        The ``from`` of the change whose substitute carries the parsed name,
        otherwise the parsed name itself
    """
    parsed = parse_ingredient_display_name(display_name)
    lookup = parsed.substituted_for or parsed.base_name

    for change in _as_changes(applied_changes):
        if change.to is not None and change.to.name == lookup:
            return change.from_
    return lookup


def reconcile_ingredients(
    ingredients: Iterable[StructuredIngredient],
    applied_changes: Iterable[Any] | None,
) -> list[DisplayIngredient]:
    """Attach display state from the change log to each ingredient.

    Changes are matched by original name; when several target the same
    ingredient the last one wins. Input ingredients are never modified.

    Args:
        ingredients: Canonical ingredients in recipe order
        applied_changes: AppliedChange entries or their dict form

    Returns:
        One DisplayIngredient per input ingredient, in the same order
    """
    by_name = {change.from_: change for change in _as_changes(applied_changes)}

    result = []
    for ingredient in ingredients:
        change = by_name.get(ingredient.name)

        if change is None:
            result.append(DisplayIngredient(
                ingredient=ingredient, state=_NORMAL, display_name=ingredient.name))
            continue

        if change.is_removal:
            state = IngredientDisplayState(status="removed", original_name=ingredient.name)
            shown = ingredient
        else:
            state = IngredientDisplayState(status="substituted", original_name=ingredient.name)
            shown = change.to

        result.append(DisplayIngredient(
            ingredient=shown,
            state=state,
            display_name=format_ingredient_display_name(shown.name, state),
        ))

    _LOGGER.debug("Reconciled %d ingredients against %d changes", len(result), len(by_name))
    return result
