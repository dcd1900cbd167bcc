"""Nutrition domain models."""

import math
from dataclasses import dataclass, field

DEFAULT_PORTION = "Standard serving"

_KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}


@dataclass(frozen=True)
class MacroProfile:
    """Exact macronutrient amounts for a food item."""

    calories: float
    protein: float
    carbs: float
    fat: float

    def __add__(self, other: "MacroProfile") -> "MacroProfile":
        return MacroProfile(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


ZERO_MACROS = MacroProfile(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class FoodItem:
    """Normalized food item with display values rounded to integers."""

    name: str
    calories: int
    protein: int
    carbs: int
    fat: int
    portion: str = DEFAULT_PORTION
    exact: MacroProfile | None = field(default=None, repr=False, compare=False)

    def amounts(self) -> MacroProfile:
        """Return the exact amounts, falling back to the display values."""
        if self.exact is not None:
            return self.exact
        return MacroProfile(
            calories=float(self.calories),
            protein=float(self.protein),
            carbs=float(self.carbs),
            fat=float(self.fat),
        )

    def to_dict(self) -> dict[str, object]:
        """Render the item for JSON responses."""
        return {
            "name": self.name,
            "portion": self.portion,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


@dataclass(frozen=True)
class NutritionTotals:
    """Rounded totals across all items of a meal."""

    calories: int
    protein: int
    carbs: int
    fat: int

    def energy_split(self) -> dict[str, int]:
        """Return the percentage of calories coming from each macronutrient."""
        if self.calories <= 0:
            return {name: 0 for name in _KCAL_PER_GRAM}
        return {
            name: math.floor(getattr(self, name) * kcal * 100 / self.calories + 0.5)
            for name, kcal in _KCAL_PER_GRAM.items()
        }

    def to_dict(self) -> dict[str, int]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


@dataclass(frozen=True)
class NutritionRecord:
    """Aggregated nutrition result for one analysis or manual entry."""

    totals: NutritionTotals
    foods: tuple[str, ...]
    food_details: tuple[FoodItem, ...]

    def to_dict(self) -> dict[str, object]:
        """Render the record for JSON responses."""
        return {
            "totals": self.totals.to_dict(),
            "foods": list(self.foods),
            "foodDetails": [item.to_dict() for item in self.food_details],
        }
