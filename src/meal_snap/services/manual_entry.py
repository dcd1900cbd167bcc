"""Manual food entry."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from meal_snap.domain.errors import EmptyInputError
from meal_snap.domain.nutrition import NutritionRecord
from meal_snap.services.nutrition import aggregate


@dataclass
class ManualEntryService:
    """Builds nutrition records from user-typed food entries."""

    def save(self, entries: Sequence[Mapping[str, object]]) -> NutritionRecord:
        """Validate entries and aggregate them into a record."""
        named = [entry for entry in entries if _has_name(entry)]
        if not named:
            raise EmptyInputError()
        return aggregate(named)


def _has_name(entry: Mapping[str, object]) -> bool:
    name = entry.get("name")
    return isinstance(name, str) and bool(name.strip())
