"""Nutrition domain models."""

from dataclasses import dataclass

CARBS_KCAL_PER_G = 4.0
FATS_KCAL_PER_G = 9.0
PROTEIN_KCAL_PER_G = 4.0


def calories_from_macros(carbs: float, fats: float, protein: float) -> float:
    """Return calories using the Atwater factors."""
    return (
        carbs * CARBS_KCAL_PER_G
        + fats * FATS_KCAL_PER_G
        + protein * PROTEIN_KCAL_PER_G
    )


@dataclass(frozen=True)
class MacroTotals:
    """Grams of each macronutrient."""

    carbs: float
    fats: float
    protein: float

    @property
    def calories(self) -> float:
        """Energy derived from the macros."""
        return calories_from_macros(self.carbs, self.fats, self.protein)
