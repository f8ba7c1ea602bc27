"""Domain models for the food catalog."""

from dataclasses import dataclass

from macros_tracker.domain.nutrition import MacroTotals, calories_from_macros

DEFAULT_SERVING_INPUT = "1.0"


@dataclass(frozen=True)
class Food:
    """A catalog entry with macros per serving."""

    id: int
    name: str
    brand: str
    carbs: float
    fats: float
    protein: float
    serving_size: str

    @property
    def calories(self) -> float:
        """Calories per serving."""
        return calories_from_macros(self.carbs, self.fats, self.protein)

    def macros_for(self, amount: float) -> MacroTotals:
        """Return the macros of `amount` servings."""
        return MacroTotals(
            carbs=self.carbs * amount,
            fats=self.fats * amount,
            protein=self.protein * amount,
        )


@dataclass
class FoodListing:
    """A food as shown in the catalog, with search and input state."""

    food: Food
    relevance: float = 0.0
    current_serving_size: str = DEFAULT_SERVING_INPUT
