"""Nutrition aggregation for identified food items."""

import math
from collections.abc import Iterable, Mapping

from meal_snap.domain.nutrition import (
    DEFAULT_PORTION,
    ZERO_MACROS,
    FoodItem,
    MacroProfile,
    NutritionRecord,
    NutritionTotals,
)

RawFoodItem = Mapping[str, object] | FoodItem

# Largest amount a single nutrient field may carry; keeps totals finite.
MAX_AMOUNT = 1_000_000_000.0

_ALIASES = {"carbs": ("carbs", "carbohydrates")}


def aggregate(raw_items: Iterable[RawFoodItem]) -> NutritionRecord:
    """Normalize raw food items and total their nutrition.

    Items without a name are dropped. Totals are computed from the exact
    coerced amounts and rounded once, so they can differ from the sum of the
    rounded per-item values.
    """
    details: list[FoodItem] = []
    total = ZERO_MACROS
    for raw in raw_items:
        item = normalize_item(raw)
        if item is None:
            continue
        details.append(item)
        total = total + item.amounts()
    return NutritionRecord(
        totals=_round_macros(total),
        foods=tuple(item.name for item in details),
        food_details=tuple(details),
    )


def normalize_item(raw: RawFoodItem) -> FoodItem | None:
    """Return a normalized food item, or None when the name is blank."""
    if isinstance(raw, FoodItem):
        name = raw.name.strip()
        if not name:
            return None
        return _build_item(name, raw.portion, _clamp(raw.amounts()))

    name = _clean_text(raw.get("name"))
    if not name:
        return None
    exact = MacroProfile(
        calories=coerce_amount(_lookup(raw, "calories")),
        protein=coerce_amount(_lookup(raw, "protein")),
        carbs=coerce_amount(_lookup(raw, "carbs")),
        fat=coerce_amount(_lookup(raw, "fat")),
    )
    return _build_item(name, raw.get("portion"), exact)


def coerce_amount(value: object) -> float:
    """Coerce a raw nutrient amount into [0, MAX_AMOUNT], defaulting to 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int):
        return float(min(max(value, 0), MAX_AMOUNT))
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return min(number, MAX_AMOUNT)


def round_half_up(value: float) -> int:
    """Round a non-negative amount to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


def _build_item(name: str, portion: object, exact: MacroProfile) -> FoodItem:
    return FoodItem(
        name=name,
        calories=round_half_up(exact.calories),
        protein=round_half_up(exact.protein),
        carbs=round_half_up(exact.carbs),
        fat=round_half_up(exact.fat),
        portion=_clean_text(portion) or DEFAULT_PORTION,
        exact=exact,
    )


def _clamp(amounts: MacroProfile) -> MacroProfile:
    return MacroProfile(
        calories=coerce_amount(amounts.calories),
        protein=coerce_amount(amounts.protein),
        carbs=coerce_amount(amounts.carbs),
        fat=coerce_amount(amounts.fat),
    )


def _round_macros(total: MacroProfile) -> NutritionTotals:
    return NutritionTotals(
        calories=round_half_up(total.calories),
        protein=round_half_up(total.protein),
        carbs=round_half_up(total.carbs),
        fat=round_half_up(total.fat),
    )


def _lookup(raw: Mapping[str, object], key: str) -> object:
    for alias in _ALIASES.get(key, (key,)):
        value = raw.get(alias)
        if value is not None:
            return value
    return None


def _clean_text(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()
