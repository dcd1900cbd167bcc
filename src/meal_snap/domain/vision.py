"""Models for vision extraction results."""

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)

# Numeric fields reach the aggregator unchanged; it does all coercion.
Amount = StrictInt | StrictFloat | StrictBool | StrictStr | None


class VisionFoodItem(BaseModel):
    """Single food item reported by the vision model."""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr | None = None
    portion: StrictStr | None = None
    calories: Amount = None
    protein: Amount = None
    carbs: Amount = Field(
        default=None, validation_alias=AliasChoices("carbs", "carbohydrates")
    )
    fat: Amount = None

    def to_raw(self) -> dict[str, object]:
        """Return the item as a raw candidate for aggregation."""
        return {
            "name": self.name,
            "portion": self.portion,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


class VisionExtract(BaseModel):
    """Structured output for vision extraction."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    food_items: list[VisionFoodItem] = Field(alias="foodItems")
