"""Canonical Pydantic models shared across mealfinder modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`ApiConfig`, :class:`OutputConfig`, and :class:`GlobalConfig`.

**API record models** -- parsed from TheMealDB responses and consumed by the
view handlers:
    :class:`Category`, :class:`MealSummary`, and :class:`Meal`.

API records keep TheMealDB's camel-case field names as aliases so that raw
response dicts validate directly, while Python code uses snake_case
attributes. Unknown fields are preserved in ``model_extra``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1/1"

MAX_INGREDIENT_SLOTS = 20
"""TheMealDB numbers ingredient and measure fields ``1`` through ``20``."""


# --- Config ---


class ApiConfig(BaseModel):
    """Connection settings for the remote recipe API."""

    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Base URL of the TheMealDB v1 API"
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/mealfinder/config.json``.

    Loaded and saved by :func:`~mealfinder.config.load_global_config` and
    :func:`~mealfinder.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~mealfinder.config.resolve_config`.
    """

    api: ApiConfig = Field(default_factory=ApiConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- API records ---


class Category(BaseModel):
    """One entry of the ``categories.php`` listing."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(alias="strCategory")
    thumb: Optional[str] = Field(default=None, alias="strCategoryThumb")
    description: Optional[str] = Field(default=None, alias="strCategoryDescription")


class MealSummary(BaseModel):
    """A meal as returned by ``filter.php`` and ``search.php``.

    ``filter.php`` only returns id, name, and thumbnail; area and category
    are present on search results.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(alias="idMeal")
    name: str = Field(default="", alias="strMeal")
    thumb: Optional[str] = Field(default=None, alias="strMealThumb")
    area: Optional[str] = Field(default=None, alias="strArea")
    category: Optional[str] = Field(default=None, alias="strCategory")


class Meal(MealSummary):
    """A full meal record from ``lookup.php``.

    The numbered ``strIngredientN`` / ``strMeasureN`` slots are not declared
    as fields; they stay in ``model_extra`` and are read by
    :meth:`ingredient_slots`.
    """

    instructions: Optional[str] = Field(default=None, alias="strInstructions")
    youtube: Optional[str] = Field(default=None, alias="strYoutube")

    def ingredient_slots(self) -> list[tuple[str, str]]:
        """Return ``(ingredient, measure)`` pairs for every non-blank ingredient slot.

        Slots whose ingredient is ``None`` or whitespace-only are skipped.
        Measures are stripped and default to ``""``.
        """
        extra = self.model_extra or {}
        slots: list[tuple[str, str]] = []
        for n in range(1, MAX_INGREDIENT_SLOTS + 1):
            ingredient = extra.get(f"strIngredient{n}")
            if not ingredient or not str(ingredient).strip():
                continue
            measure = extra.get(f"strMeasure{n}") or ""
            slots.append((str(ingredient).strip(), str(measure).strip()))
        return slots
