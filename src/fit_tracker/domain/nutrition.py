"""Nutrition lookup domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScannedFood:
    """Per-100g nutrients for a product found by barcode."""

    barcode: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    sugar: float
    fiber: float
    sodium: float
    is_empty_result: bool = False

    @classmethod
    def empty(cls, barcode: str) -> "ScannedFood":
        """Return the sentinel used when no product matches the barcode."""
        return cls(
            barcode=barcode,
            name="",
            calories=0.0,
            protein=0.0,
            carbs=0.0,
            fat=0.0,
            sugar=0.0,
            fiber=0.0,
            sodium=0.0,
            is_empty_result=True,
        )
