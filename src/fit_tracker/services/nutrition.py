"""Barcode nutrition lookups via Open Food Facts."""

import logging
from dataclasses import dataclass

import httpx

from fit_tracker.adapters.open_food_facts_client import FoodFactsClient
from fit_tracker.domain.errors import EntryValidationError, NetworkUnavailableError
from fit_tracker.domain.nutrition import ScannedFood
from fit_tracker.services.cache import Cache

UNKNOWN_PRODUCT = "Unknown Product"

_NUTRIMENT_KEYS = {
    "calories": "energy-kcal_100g",
    "protein": "proteins_100g",
    "carbs": "carbohydrates_100g",
    "fat": "fat_100g",
    "sugar": "sugars_100g",
    "fiber": "fiber_100g",
    "sodium": "sodium_100g",
}

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Resolve scanned barcodes into per-100g nutrients, with caching."""

    client: FoodFactsClient
    cache: Cache
    ttl_seconds: int = 86400

    async def lookup_barcode(self, barcode: str) -> ScannedFood:
        """Return nutrients for a barcode or the empty-result sentinel."""
        cleaned = barcode.strip()
        if not cleaned.isdigit():
            raise EntryValidationError("barcode", "must contain only digits")
        cache_key = f"off:product:{cleaned}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, ScannedFood):
            return cached

        try:
            product = await self.client.get_product(cleaned)
        except httpx.HTTPError as exc:
            _logger.warning("Barcode lookup for %s failed: %s", cleaned, exc)
            raise NetworkUnavailableError("Food database unreachable") from exc

        if product is None:
            _logger.info("No product found for barcode %s", cleaned)
            result = ScannedFood.empty(cleaned)
        else:
            result = _parse_product(cleaned, product)
        self.cache.set(cache_key, result, ttl_seconds=self.ttl_seconds)
        return result


def _parse_product(barcode: str, product: dict[str, object]) -> ScannedFood:
    nutriments = product.get("nutriments")
    values = nutriments if isinstance(nutriments, dict) else {}
    name = product.get("product_name")
    return ScannedFood(
        barcode=barcode,
        name=name if isinstance(name, str) and name else UNKNOWN_PRODUCT,
        **{
            field_name: _to_float(values.get(key))
            for field_name, key in _NUTRIMENT_KEYS.items()
        },
    )


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0
