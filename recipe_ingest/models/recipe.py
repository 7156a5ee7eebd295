"""
Recipe data models for the ingestion pipeline.

This module defines the Pydantic models exchanged between the extraction,
parsing, coercion and reconciliation stages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

DisplayStatus = Literal["normal", "removed", "substituted"]


class Substitution(BaseModel):
    """A suggested replacement attached to exactly one ingredient.

    Attributes:
        name: Name of the replacement ingredient (e.g., 'almond flour')
        amount: Optional amount, kept as given by the producer (e.g., '1', 0.5)
        unit: Optional unit (e.g., 'cup')
        description: Optional note on how the substitution behaves
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Name of the substitute ingredient")
    amount: str | float | int | None = Field(
        default=None,
        description="Amount of the substitute, e.g. '1' or 0.5"
    )
    unit: str | None = Field(default=None, description="Unit of the substitute amount")
    description: str | None = Field(
        default=None,
        description="Free-text explanation of the substitution"
    )


class StructuredIngredient(BaseModel):
    """A single ingredient decomposed into amount, unit, name and preparation.

    Attributes:
        name: The ingredient name without quantity or unit text (e.g., 'flour')
        amount: Optional amount as text (e.g., '1 1/2', '2-3')
        unit: Optional standardized unit (e.g., 'cup', 'tbsp')
        preparation: Optional preparation note (e.g., 'sifted')
        suggested_substitutions: Optional list of substitutions
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="The ingredient name, e.g. 'flour'")
    amount: str | None = Field(default=None, description="The amount as text, e.g. '1 1/2'")
    unit: str | None = Field(default=None, description="The standardized unit, e.g. 'cup'")
    preparation: str | None = Field(
        default=None,
        description="Preparation note, e.g. 'finely chopped'"
    )
    suggested_substitutions: list[Substitution] | None = Field(
        default=None,
        description="Substitutions suggested for this ingredient"
    )

    @property
    def is_quantityless(self) -> bool:
        """True for 'to taste' style ingredients with neither amount nor unit."""
        return self.amount is None and self.unit is None


class IngredientGroup(BaseModel):
    """An ordered, named section of a recipe's ingredients (e.g., 'Sauce')."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Group heading, e.g. 'Main' or 'For the sauce'")
    ingredients: list[StructuredIngredient] = Field(
        description="The ingredients in this group, in recipe order"
    )


class AppliedChange(BaseModel):
    """A user edit against an ingredient, keyed by the original name.

    ``to`` is None for a removal and the replacement ingredient for a
    substitution. The field ``from_`` is serialized as ``from``.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from", description="Canonical name of the original ingredient")
    to: StructuredIngredient | None = Field(
        default=None,
        description="Replacement ingredient, or None when removed"
    )

    @property
    def is_removal(self) -> bool:
        return self.to is None


class ParsedIngredient(BaseModel):
    """Components of a single free-text ingredient line."""

    model_config = ConfigDict(frozen=True)

    name: str
    amount: str | None = None
    unit: str | None = None
    preparation: str | None = None


class ParsedDisplayName(BaseModel):
    """Result of reading edit state back out of a display name."""

    base_name: str
    is_removed: bool = False
    substituted_for: str | None = None


class IngredientDisplayState(BaseModel):
    """Explicit edit state of an ingredient at render time."""

    model_config = ConfigDict(frozen=True)

    status: DisplayStatus = "normal"
    original_name: str | None = None


class DisplayIngredient(BaseModel):
    """An ingredient paired with its computed display state."""

    ingredient: StructuredIngredient
    state: IngredientDisplayState
    display_name: str


class ExtractedContent(BaseModel):
    """Recipe text sections pulled out of a web page.

    Intermediate record handed to the model-parsing step; never persisted.
    """

    title: str | None = None
    ingredients_text: str | None = None
    instructions_text: str | None = None
    recipe_yield_text: str | None = None
    prep_time: str | None = None
    cook_time: str | None = None
    total_time: str | None = None
    description: str | None = None

    def missing_fields(self) -> list[str]:
        """Names of the core fields that are still unset."""
        core = ("title", "ingredients_text", "instructions_text", "recipe_yield_text")
        return [name for name in core if getattr(self, name) is None]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()


class FetchedRecipe(BaseModel):
    """Extracted page content together with its cache key."""

    cache_key: str
    source_url: str
    content: ExtractedContent
    warnings: list[str] = Field(default_factory=list)


@dataclass
class Outcome(Generic[T]):
    """A value plus the non-fatal warnings collected while producing it."""

    value: T
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
