"""Mock producer standing in for the vision collaborator."""

import random
from collections.abc import Sequence

from meal_snap.domain.nutrition import FoodItem, NutritionRecord
from meal_snap.services.nutrition import RawFoodItem, aggregate, normalize_item

MOCK_COUNT_CHOICES = (2, 3)


def _pool(
    entries: list[tuple[str, float, float, float, float, str]],
) -> tuple[FoodItem, ...]:
    items = (
        normalize_item(
            {
                "name": name,
                "calories": calories,
                "protein": protein,
                "carbs": carbs,
                "fat": fat,
                "portion": portion,
            }
        )
        for name, calories, protein, carbs, fat, portion in entries
    )
    return tuple(item for item in items if item is not None)


MOCK_FOOD_POOL: tuple[FoodItem, ...] = _pool(
    [
        ("Grilled Chicken Breast", 165, 31, 0, 3.6, "100g"),
        ("Brown Rice", 216, 5, 45, 1.8, "1 cup cooked"),
        ("Steamed Broccoli", 55, 3.7, 11.2, 0.6, "1 cup"),
        ("Salmon", 206, 22.1, 0, 13, "100g"),
        ("Quinoa", 222, 8.1, 39.4, 3.6, "1 cup cooked"),
        ("Spinach", 23, 2.9, 3.6, 0.4, "1 cup raw"),
        ("Steak", 271, 25.6, 0, 18.5, "100g"),
        ("Mashed Potatoes", 174, 2.5, 36.6, 2.1, "1 cup"),
        ("Asparagus", 20, 2.2, 3.9, 0.2, "6 spears"),
        ("Avocado", 234, 2.9, 12.5, 21.5, "1 medium"),
        ("Sweet Potato", 114, 2.1, 26.8, 0.1, "1 medium"),
        ("Greek Yogurt", 100, 17, 6, 0.4, "170g container"),
    ]
)


def build_mock_record(
    candidate_pool: Sequence[RawFoodItem] = MOCK_FOOD_POOL,
    count: int | None = None,
    rng: random.Random | None = None,
) -> NutritionRecord:
    """Aggregate two or three distinct items drawn at random from the pool."""
    chooser = rng or random.Random()
    if count is None:
        count = chooser.choice(MOCK_COUNT_CHOICES)
    elif count not in MOCK_COUNT_CHOICES:
        raise ValueError(f"Mock item count must be 2 or 3, got {count}")
    size = min(count, len(candidate_pool))
    indices = chooser.sample(range(len(candidate_pool)), k=size)
    return aggregate(candidate_pool[index] for index in indices)
