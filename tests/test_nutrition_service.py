"""Tests for nutrition service."""

import asyncio

import httpx
import pytest

from fit_tracker.domain.errors import EntryValidationError, NetworkUnavailableError
from fit_tracker.services.cache import InMemoryCache
from fit_tracker.services.nutrition import UNKNOWN_PRODUCT, NutritionService
from tests.conftest import FakeFoodFactsClient


def test_lookup_parses_nutrients(food_facts_client) -> None:
    service = NutritionService(food_facts_client, InMemoryCache())

    food = asyncio.run(service.lookup_barcode("737628064502"))

    assert food.name == "Thai Peanut Noodles"
    assert food.calories == 385
    assert food.protein == 9.6
    assert food.sodium == 0.72
    assert not food.is_empty_result


def test_lookup_uses_cache(food_facts_client) -> None:
    service = NutritionService(food_facts_client, InMemoryCache())

    asyncio.run(service.lookup_barcode("737628064502"))
    asyncio.run(service.lookup_barcode("737628064502"))

    assert food_facts_client.calls == ["737628064502"]


def test_cache_expires() -> None:
    now = [0.0]
    cache = InMemoryCache(clock=lambda: now[0])
    cache.set("key", "value", ttl_seconds=10)

    assert cache.get("key") == "value"
    now[0] = 10.0
    assert cache.get("key") is None


def test_unknown_barcode_returns_empty_sentinel(food_facts_client) -> None:
    service = NutritionService(food_facts_client, InMemoryCache())

    food = asyncio.run(service.lookup_barcode("0000000000000"))

    assert food.is_empty_result
    assert food.calories == 0


def test_missing_name_and_nutrients_default() -> None:
    client = FakeFoodFactsClient(
        products={"123": {"nutriments": {"energy-kcal_100g": "250", "fat_100g": None}}}
    )
    service = NutritionService(client, InMemoryCache())

    food = asyncio.run(service.lookup_barcode("123"))

    assert food.name == UNKNOWN_PRODUCT
    assert food.calories == 250
    assert food.fat == 0


def test_network_failure_is_not_retried() -> None:
    client = FakeFoodFactsClient(error=httpx.ConnectError("offline"))
    service = NutritionService(client, InMemoryCache())

    with pytest.raises(NetworkUnavailableError):
        asyncio.run(service.lookup_barcode("737628064502"))
    assert len(client.calls) == 1


def test_non_numeric_barcode_rejected(food_facts_client) -> None:
    service = NutritionService(food_facts_client, InMemoryCache())

    with pytest.raises(EntryValidationError):
        asyncio.run(service.lookup_barcode("abc"))
    assert food_facts_client.calls == []


def test_server_error_maps_to_network_unavailable() -> None:
    request = httpx.Request("GET", "https://off.test/api/v0/product/1.json")
    client = FakeFoodFactsClient(
        error=httpx.HTTPStatusError(
            "Bad gateway",
            request=request,
            response=httpx.Response(502, request=request),
        )
    )
    service = NutritionService(client, InMemoryCache())

    with pytest.raises(NetworkUnavailableError):
        asyncio.run(service.lookup_barcode("737628064502"))
