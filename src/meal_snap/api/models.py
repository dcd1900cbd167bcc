"""Request models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeFoodRequest(BaseModel):
    """Body of an image analysis request."""

    image: str | None = None


class ManualFoodEntry(BaseModel):
    """One row of the manual entry form; values are free text."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str | None = None
    portion: str | None = None
    calories: str | None = None
    protein: str | None = None
    carbs: str | None = None
    fat: str | None = None


class ManualEntryRequest(BaseModel):
    """Body of a manual entry request."""

    model_config = ConfigDict(populate_by_name=True)

    food_items: list[ManualFoodEntry] = Field(default_factory=list, alias="foodItems")
